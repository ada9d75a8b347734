"""Domain services: sessions, authorization, users, franchises, orders, factory."""
