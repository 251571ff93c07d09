import os

# main.py builds its default app at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MAIL_USERNAME", "bookings@lotuscabs.in")
os.environ.setdefault("MAIL_PASSWORD", "app-password")
os.environ.setdefault("MAIL_FROM", "bookings@lotuscabs.in")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")
os.environ.setdefault("RECAPTCHA_SECRET", "test-secret")
