"""
Contact mail relay.

Validated contact submissions are forwarded to the site owner over SMTP
(STARTTLS). Delivery is fire-and-forget: it runs on a daemon thread, failures
are logged and never retried, and the visitor's response does not wait for it.
Without MAIL_USER / MAIL_PASSWORD the relay is disabled and submissions are
only logged.
"""

import logging
import smtplib
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from ..core.contact import ContactSubmission

log = logging.getLogger("portfolio.mailer")

SMTP_TIMEOUT = 15


class ContactMailer:
    """Send contact form submissions via SMTP."""

    def __init__(self, config):
        self.smtp_host = config.get("SMTP_HOST") or "smtp.gmail.com"
        self.smtp_port = int(config.get("SMTP_PORT") or 587)
        self.email_addr = config.get("MAIL_USER") or ""
        self.password = config.get("MAIL_PASSWORD") or ""
        self.recipient = config.get("CONTACT_RECIPIENT") or self.email_addr
        self.from_name = config.get("MAIL_FROM_NAME") or "Portfolio contact form"

    @property
    def configured(self) -> bool:
        return bool(self.email_addr and self.password and self.recipient)

    def create_message(self, submission: ContactSubmission) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.from_name, self.email_addr))
        msg["To"] = self.recipient
        msg["Reply-To"] = submission.email
        msg["Subject"] = f"New contact form submission from {submission.email}"

        lines = [f"Email: {submission.email}"]
        if submission.band_name:
            lines.append(f"Band / artist: {submission.band_name}")
        if submission.number_of_songs:
            lines.append(f"Number of songs: {submission.number_of_songs}")
        if submission.services:
            lines.append(f"Services: {', '.join(submission.services)}")
        if submission.links:
            lines.append(f"Links: {submission.links}")
        lines += ["", submission.message]

        msg.attach(MIMEText("\n".join(lines), "plain", "utf-8"))
        return msg

    def send(self, submission: ContactSubmission) -> bool:
        msg = self.create_message(submission)
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=SMTP_TIMEOUT) as server:
            server.starttls()
            server.login(self.email_addr, self.password)
            server.send_message(msg)
        log.info("Contact mail relayed for %s", submission.email)
        return True

    def _deliver(self, submission: ContactSubmission) -> None:
        try:
            self.send(submission)
        except (smtplib.SMTPException, OSError):
            log.exception("Contact mail delivery failed for %s", submission.email)

    def relay(self, submission: ContactSubmission, background: bool = True):
        """Deliver without affecting the caller. Returns the worker thread, if any."""
        if not self.configured:
            log.info("Mail relay not configured; contact from %s logged only", submission.email)
            return None
        if not background:
            self._deliver(submission)
            return None
        t = threading.Thread(target=self._deliver, args=(submission,),
                             name="contact-mail", daemon=True)
        t.start()
        return t
