"""
Gestor Order Engine
=====================
Customer orders and their status lifecycle.
"""
