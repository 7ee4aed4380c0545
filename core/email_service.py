import logging
import smtplib
import threading
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from html import escape

logger = logging.getLogger(__name__)


class EmailSender:
    """SMTP sender configured once from Settings; every send returns True/False instead of raising."""

    def __init__(self, settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.email_configured

    def build_order_confirmation(self, to_email: str, order) -> MIMEMultipart:
        app_name = self.settings.app_name
        message = MIMEMultipart("alternative")
        message["Subject"] = f"{app_name} - Order #{order.id} received"
        message["From"] = f"{app_name} <{self.settings.sender_address}>"
        message["To"] = to_email

        rows = "".join(
            f"""
                        <tr>
                            <td style="padding: 6px 0; color: #333;">{line.quantity}x {escape(line.name)}</td>
                            <td style="padding: 6px 0; color: #333; text-align: right;">{line.subtotal:.2f}</td>
                        </tr>"""
            for line in order.items
        )
        recipient = escape(order.recipient_name) if order.recipient_name else "you"

        html = f"""
        <html>
            <body style="font-family: Arial, sans-serif; padding: 20px; background-color: #f4f4f4;">
                <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1);">
                    <h2 style="color: #333; text-align: center;">Thanks for your order!</h2>
                    <p style="color: #666; font-size: 16px;">Order <strong>#{order.id}</strong> is being processed and will be delivered to {recipient} at:</p>
                    <p style="color: #333; font-size: 15px; background-color: #f8f9fa; padding: 12px; border-radius: 8px;">{escape(order.delivery_address)}<br>{escape(order.phone_number)}</p>

                    <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">{rows}
                        <tr>
                            <td style="padding-top: 12px; border-top: 1px solid #eee; font-weight: bold;">Total</td>
                            <td style="padding-top: 12px; border-top: 1px solid #eee; font-weight: bold; text-align: right;">{order.total_price:.2f}</td>
                        </tr>
                    </table>

                    <p style="color: #666; font-size: 14px;">You can follow its progress from the Orders tab.</p>
                    <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
                    <p style="color: #999; font-size: 12px; text-align: center;">
                        This is an automated message from {app_name}. Please do not reply to this email.
                    </p>
                </div>
            </body>
        </html>
        """
        message.attach(MIMEText(html, "html"))
        return message

    def build_password_reset(self, to_email: str, reset_code: str, full_name: str = "", minutes: int = 10) -> MIMEMultipart:
        app_name = self.settings.app_name
        message = MIMEMultipart("alternative")
        message["Subject"] = f"{app_name} - Password Reset Code"
        message["From"] = f"{app_name} <{self.settings.sender_address}>"
        message["To"] = to_email

        html = f"""
        <html>
            <body style="font-family: Arial, sans-serif; padding: 20px; background-color: #f4f4f4;">
                <div style="text-align: center; max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1);">
                    <h2 style="color: #333; text-align: center;">Hello {escape(full_name or "there")},</h2>
                    <p style="color: #666; font-size: 16px;">We received a request to reset your password. Use the code below to proceed.</p>

                    <div style="background-color: #fff3cd; padding: 20px; border-radius: 8px; text-align: center; margin: 30px 0; border: 2px solid #ffc107;">
                        <p style="color: #856404; margin-bottom: 10px; font-weight: bold;">Your password reset code is:</p>
                        <h1 style="color: #FF6B35; font-size: 36px; letter-spacing: 5px; margin: 10px 0;">{escape(reset_code)}</h1>
                    </div>

                    <p style="color: #666; font-size: 14px;">This code will expire in <strong>{minutes} minutes</strong>.</p>
                    <p style="color: #666; font-size: 14px;">If you didn't request a password reset, you can ignore this email.</p>

                    <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
                    <p style="color: #999; font-size: 12px; text-align: center;">
                        This is an automated message from {app_name}. Please do not reply to this email.
                    </p>
                </div>
            </body>
        </html>
        """
        message.attach(MIMEText(html, "html"))
        return message

    def send(self, message) -> bool:
        if not self.configured:
            logger.warning("Email not configured (SMTP_EMAIL/SMTP_PASSWORD); skipping '%s' to %s",
                           message["Subject"], message["To"])
            return False
        try:
            with smtplib.SMTP(self.settings.smtp_server, self.settings.smtp_port, timeout=10) as server:
                server.starttls()  # Secure connection
                server.login(self.settings.smtp_email, self.settings.smtp_password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", message["To"], e)
            return False
        logger.info("Email '%s' sent to %s", message["Subject"], message["To"])
        return True

    def send_order_confirmation(self, to_email: str, order) -> bool:
        """Send the receipt for a freshly created order."""
        if not to_email:
            return False
        return self.send(self.build_order_confirmation(to_email, order))

    def send_in_background(self, message) -> threading.Thread:
        """Deliver `message` on a daemon thread so a UI handler never waits on SMTP."""
        thread = threading.Thread(target=self.send, args=(message,), daemon=True)
        thread.start()
        return thread

    def queue_order_confirmation(self, to_email: str, order):
        """Build the receipt now (while `order` is loaded) and send it in the background."""
        if not to_email:
            return None
        return self.send_in_background(self.build_order_confirmation(to_email, order))

    def send_password_reset(self, to_email: str, reset_code: str, full_name: str = "") -> bool:
        if not to_email:
            return False
        return self.send(self.build_password_reset(to_email, reset_code, full_name))
