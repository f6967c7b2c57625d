"""Lyncis: order management for Jastip (personal shopping) services."""
