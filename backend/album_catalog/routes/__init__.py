# Routes package init
"""
Album Catalog Backend: Routes Package
======================================

Route Inventory:
    - pages.py:   GET  /                  (redirect to /welcome/)
                  GET  /welcome/          (HTML album table)
                  GET  /albums/new        (HTML creation form)
                  POST /albums/new        (create from form)
    - albums.py:  GET  /albums            (JSON list)
                  GET  /albums/{id}       (JSON lookup)
                  POST /albums            (create from JSON)
    - health.py:  GET  /health            (storage connectivity)

Routes stay thin: they resolve the repository dependency, call
AlbumService and format the response.
"""
