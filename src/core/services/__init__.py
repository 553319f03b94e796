"""Servicios del Core: resolución, listado de versiones y ensamblado."""
