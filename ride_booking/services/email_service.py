from html import escape

from fastapi_mail import FastMail, MessageSchema, MessageType, ConnectionConfig

SUBJECT = "New Ride Booking Received"


def build_mail_config(settings) -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=True,
        SUPPRESS_SEND=settings.MAIL_SUPPRESS_SEND,
    )


def render_booking_email(booking) -> str:
    def field(value):
        return escape(value or "")

    return f"""
    <html>
    <body>
        <h2>New Booking</h2>
        <p><strong>Name:</strong> {field(booking.name)}</p>
        <p><strong>Mobile:</strong> {field(booking.mobile)}</p>
        <p><strong>Ride Type:</strong> {field(booking.ride_type)}</p>
        <p><strong>Pickup:</strong> {field(booking.pickup_city)}</p>
        <p><strong>Drop:</strong> {field(booking.drop_city)}</p>
        <p><strong>Date:</strong> {field(booking.date)}</p>
        <p><strong>Time:</strong> {field(booking.time)}</p>
        <p><strong>Vehicle:</strong> {field(booking.vehicle)}</p>
        <p><strong>Instructions:</strong> {field(booking.instructions or "None")}</p>
    </body>
    </html>
    """


class BookingNotifier:
    """Sends the operator a summary of every stored booking."""

    def __init__(self, mail: FastMail, recipient: str):
        self.mail = mail
        self.recipient = recipient

    @classmethod
    def from_settings(cls, settings) -> "BookingNotifier":
        return cls(FastMail(build_mail_config(settings)), settings.operator_email)

    async def send(self, booking) -> None:
        message = MessageSchema(
            subject=SUBJECT,
            recipients=[self.recipient],
            body=render_booking_email(booking),
            subtype=MessageType.html,
        )
        await self.mail.send_message(message)
