# Services package init
"""
Blog API Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService: CRUD over BlogPost documents, not-found and store-error translation
"""
