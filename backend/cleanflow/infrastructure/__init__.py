"""Infrastructure Layer — wire codecs and logging setup."""
