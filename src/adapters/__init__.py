"""Adaptadores de I/O: proxy HTTP, archivo zip, builders y exportadores."""
