"""Modelos y entidades del dominio.

- Aquí viven las estructuras de datos de Portainer (Pydantic v2).
- El dominio no conoce HTTP ni la CLI: solo conceptos del problema.
"""
