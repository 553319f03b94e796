"""Interfaces/abstracciones del Core.

Define contratos (Protocol) que implementan adaptadores concretos: el
proxy de módulos, el constructor de documentación y el detector de
licencias. El Core depende de estas abstracciones, no de httpx ni de
implementaciones concretas.
"""
