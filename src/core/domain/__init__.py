"""Modelos y entidades del dominio.

Aquí viven las estructuras de datos puras (Pydantic v2) y las reglas de
rutas de módulo. El dominio no conoce HTTP, CLI ni el sistema de archivos.
"""
