"""
Record Shop Backend — Services Layer
======================================

What:  Business logic between routes (HTTP) and repositories (SQL).
How:   Services accept request schemas, apply business rules, call
       repositories and return response schemas.

Service Inventory:
    - RecordValidator: release-year and required-field rules for records
    - RecordService:   catalog create/list/lookup/detail/update/delete
    - UserService:     sign-up and login
"""
