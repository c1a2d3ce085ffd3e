# Services package init
"""
Scholarship Portal Backend — Services Layer
============================================

Service Inventory:
    - DocumentService:     generic find/insert/update/delete over one table
    - ScholarshipService:  scholarships collection
    - UserService:         users collection, signup and roles
    - ReviewService:       reviews collection
    - ApplicationService:  applied scholarships collection
    - PaymentService:      Stripe payment intents with retry and circuit breaker

Each module exposes a module-level singleton (e.g. `user_service`) that
route handlers call with the request's session.
"""
