# Routes package init
"""
Blog API — API Routes Package
==============================

Route Inventory:
    - posts.py:  POST   /posts
                 GET    /posts
                 GET    /posts/{id}
                 PUT    /posts/{id}
                 DELETE /posts/{id}

Routes are THIN: they extract the path parameter and body, call PostService,
and return its result. Status codes for errors come from the global handlers.
"""
