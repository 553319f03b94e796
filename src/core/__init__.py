"""Core de moddoc: dominio, contratos, configuración y servicios."""
