# Services package init
"""
Blog API Backend — Services Layer
==================================

Service Inventory:
    - BlogService: persistence adapter for blog posts (create, list, find,
      update, delete), built over an injected Database.
"""
