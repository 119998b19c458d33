"""LightBnB data access layer and HTTP surface."""
