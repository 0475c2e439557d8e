"""
Gestor Customer Engine
========================
Customer profiles and purchase statistics.
"""
