"""
Notifications Module - Telegram notifications to the portfolio owner
"""

import threading
import requests
from flask import current_app
from markupsafe import escape

TELEGRAM_API_URL = 'https://api.telegram.org/bot{token}/sendMessage'


def get_telegram_credentials():
    """
    Owner Telegram credentials from configuration

    Returns:
        tuple: (bot_token, chat_id) or (None, None) if not configured
    """
    bot_token = current_app.config.get('OWNER_TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('OWNER_TELEGRAM_CHAT_ID')
    if bot_token and chat_id:
        return bot_token, chat_id
    return None, None


def send_telegram_notification(message_text):
    """
    Send a Telegram message to the owner

    Args:
        message_text (str): HTML-formatted message

    Returns:
        bool: True if sent successfully, False otherwise
    """
    bot_token, chat_id = get_telegram_credentials()
    if not (bot_token and chat_id):
        current_app.logger.debug("Telegram credentials not configured, skipping notification")
        return False

    try:
        response = requests.post(
            TELEGRAM_API_URL.format(token=bot_token),
            json={'chat_id': chat_id, 'text': message_text, 'parse_mode': 'HTML'},
            timeout=10
        )
        if response.status_code == 200:
            current_app.logger.info("Telegram notification sent")
            return True
        current_app.logger.error(f"Telegram API error: {response.status_code}")
        return False
    except requests.RequestException as e:
        current_app.logger.error(f"Telegram notification error: {str(e)}")
        return False


def format_message_notification(message):
    """Telegram summary of a new contact message"""
    preview = message['message'][:300]
    return (
        f"📧 <b>New Portfolio Message</b>\n\n"
        f"👤 <b>From:</b> {escape(message['name'])} ({escape(message['email'])})\n"
        f"📌 <b>Subject:</b> {escape(message['subject'])}\n\n"
        f"{escape(preview)}"
    )


def notify_new_message(message):
    """Send the new-message notification on a background thread"""
    bot_token, chat_id = get_telegram_credentials()
    if not (bot_token and chat_id):
        return None

    app = current_app._get_current_object()
    text = format_message_notification(message)

    def _send():
        with app.app_context():
            send_telegram_notification(text)

    thread = threading.Thread(target=_send, daemon=True)
    thread.start()
    return thread


__all__ = [
    'get_telegram_credentials',
    'send_telegram_notification',
    'format_message_notification',
    'notify_new_message'
]
