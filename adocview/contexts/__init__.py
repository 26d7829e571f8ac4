"""Bounded contexts of adocview."""
