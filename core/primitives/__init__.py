"""
Gestor Core Primitives - Shop Records
=======================================
Immutable records shared by every engine:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses, updated via ``dataclasses.replace``)
- Self-validating (``__post_init__`` normalizes or raises ValueError)

Modules:
    money    - Decimal parsing and two-decimal display
    fields   - text / enum / integer / timestamp coercion
    ids      - record id generators
    catalog  - Product, Supplier
    party    - Customer and its derived statistics
    order    - Order, OrderItem and the status state machine
"""
