# Routes package init
"""
Employee Records Backend — API Routes Package
==============================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - employees.py:  POST/GET /employees, GET/PUT/DELETE /employees/{id},
                     GET /employees/search/{name}
    - health.py:     GET /health (service health check)

Routes stay thin: read the request, call the validator and repository,
return the result. Error responses come from the handlers in main.py.
"""
