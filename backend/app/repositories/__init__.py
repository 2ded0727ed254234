# Repositories package init
"""
Employee Records Backend — Repository Layer
============================================

What:  Typed wrappers around storage operations.
How:   Each repository method performs exactly one storage round trip over
       the request's AsyncSession and translates driver failures into
       application exceptions.

Repository Inventory:
    - EmployeeRepository: create, list, get_by_id, update, delete_by_id, search_by_name
"""
