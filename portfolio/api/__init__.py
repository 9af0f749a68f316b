"""HTTP surface.

Modules:
    site       — public pages, contact API, data-backed file serving
    admin      — Basic-Auth protected admin panel
    templates  — inline Jinja page templates
"""
