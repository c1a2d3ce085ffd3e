# Routes package init
"""
Scholarship Portal Backend — API Routes Package
================================================

Route Inventory:
    - health.py:        GET /, GET /health
    - scholarships.py:  /top-scholarships, /scholarships, /update-scholarships/{id}
    - users.py:         /users, /users/{id}/role, /user-role/{email}
    - reviews.py:       /reviews, /reviews/{email}, /reviews/scholarship/{id}
    - applications.py:  /applied-scholarships, /applications
    - payments.py:      POST /create-payment-intent

Routes stay thin: they parse the request, call one service method, and
return its result. Status-code mapping for failures lives in the global
exception handlers (main.py).
"""
