"""External service integrations.

Modules:
    mailer  — SMTP relay for contact form submissions
"""
