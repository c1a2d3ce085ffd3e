# Schemas package init
"""
Scholarship Portal Backend — Pydantic Request/Response Schemas
===============================================================

What:  The API contract between the portal frontend and this backend.
How:   Request bodies are typed per collection; documents themselves are
       returned as plain JSON objects since their shape is open-ended.
"""
