# Services package init
"""
Employee Records Backend — Services Layer
=========================================

What:  Request-independent rules that sit between routes and storage.

Service Inventory:
    - employee_validator: field rule table, violation collection, normalisation
"""
