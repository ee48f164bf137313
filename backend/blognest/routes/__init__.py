"""
BlogNest Backend — API Routes Package
=======================================

Route Inventory (blog and user routers are mounted under settings.api_prefix):
    - blog.py:    /blog/*   blog lifecycle
    - user.py:    /user/*   register, login, list
    - health.py:  /health   service health check

Routes are thin: they parse the request, call one service method and wrap
the result in the response envelope. Business rules live in services.
"""
