"""
Portfolio — bilingual artist site with a single-operator admin panel

Packages:
    api/        Public site and admin Blueprints, inline page templates
    core/       Paths, secrets, JSON store, tracks, uploads, security, i18n
    agents/     Outbound integrations (contact mail relay)
    seed_data/  Default locale files copied into a fresh data directory
"""
