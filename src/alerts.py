import smtplib
from email.message import EmailMessage

import requests

from . import __version__

USER_AGENT = f"tailscan/{__version__}"


def send_slack(webhook: str, text: str) -> bool:
    if not webhook:
        return False
    payload = {"text": text}
    headers = {"User-Agent": USER_AGENT}
    try:
        r = requests.post(webhook, json=payload, headers=headers, timeout=5)
        return r.status_code in (200, 201, 202)
    except requests.RequestException as e:
        print(f"[tailscan] Slack send failed: {e}")
        return False


def send_email(server: str, port: int, sender: str, to_list: list,
               subject: str, body: str, username: str = None,
               password: str = None, starttls: bool = False) -> bool:
    msg = EmailMessage()
    msg['Subject'] = subject
    msg['From'] = sender
    msg['To'] = ','.join(to_list)
    msg.set_content(body)
    try:
        with smtplib.SMTP(server, port, timeout=10) as s:
            if starttls:
                s.ehlo()
                s.starttls()
            if username:
                s.login(username, password or "")
            s.send_message(msg)
        return True
    except (smtplib.SMTPException, OSError) as e:
        print(f"[tailscan] Email send failed: {e}")
        return False


class Notifier:
    """Fans session events out to the channels enabled under `alerts`."""

    def __init__(self, config: dict):
        self.config = config.get("alerts", {})

    def alert_console(self, title, body):
        print(f"[tailscan] {title}: {body}")

    def alert_slack(self, title, body):
        return send_slack(self.config.get("slack_webhook"), f"*{title}*\n{body}")

    def alert_smtp(self, title, body):
        sconf = self.config.get("smtp", {})
        if not sconf.get("enabled"):
            return False
        to = sconf.get("to") or []
        if isinstance(to, str):
            to = [to]
        return send_email(
            server=sconf.get("server", "localhost"),
            port=sconf.get("port", 25),
            sender=sconf.get("from", "tailscan@localhost"),
            to_list=to,
            subject=f"tailscan alert: {title}",
            body=body,
            username=sconf.get("username"),
            password=sconf.get("password"),
            starttls=sconf.get("starttls", False),
        )

    def alert_all(self, title, body):
        if self.config.get("console", True):
            self.alert_console(title, body)
        if self.config.get("slack_webhook"):
            self.alert_slack(title, body)
        if self.config.get("smtp", {}).get("enabled"):
            self.alert_smtp(title, body)

    # Session events
    def rotation(self, path, state, reason):
        if not self.config.get("on_rotation", True):
            return
        self.alert_all(
            f"Rotation #{state.rotation_count}",
            f"{path}: {reason}; reading again from offset 0",
        )

    def failure(self, path, error):
        self.alert_all("Session failed", f"{path}: {error}")
