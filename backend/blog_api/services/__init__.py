# Services package init
"""
Blog API — Services Layer
==========================

Service Inventory:
    - PostService: create, get, list, update and delete blog posts
"""
