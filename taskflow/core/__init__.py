"""Configuration, logging, errors and backend clients."""
