"""
Record Shop Backend — Repositories (Persistence Layer)
========================================================

What:  The only modules that build SQL statements.
How:   Each repository is stateless and takes the request's AsyncSession
       as the first argument of every method.

Inventory:
    - RecordRepository: records CRUD plus the records/details/tracks join
    - UserRepository:   user insert and email lookup
"""
