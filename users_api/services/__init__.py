# Services package init
"""
Users API - Services Layer
==========================

Service Inventory:
    - UserService: list/create/update/delete over the users collection

Services know MongoDB but not HTTP; routes know HTTP but not MongoDB.
"""
