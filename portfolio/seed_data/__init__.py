"""Default content bundled with the package.

locales/en.json and locales/fr.json are copied into DATA_DIR/locales on first
boot and never read from here again, so operator edits always win.
"""
