"""
Gestor Catalog Engine
=======================
Products and suppliers.
"""
