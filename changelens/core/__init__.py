"""Core types and the navigation controller."""
