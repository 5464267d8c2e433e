from html import escape

VERIFICATION_SUBJECT = "Confirm your email address"


def render_verification_email(verify_url: str, ttl_minutes: int) -> str:
    """HTML body of the email carrying the verification link."""
    url = escape(verify_url, quote=True)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2>Confirm your email address</h2>
  <p>Click the button below to finish signing up.</p>
  <p>This link expires in {ttl_minutes} minutes.</p>
  <a href="{url}" style="display: inline-block; background: #0070f3; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">Confirm email</a>
  <p>Or paste this URL into your browser:</p>
  <p style="word-break: break-all; background: #eee; padding: 10px;">{url}</p>
  <p style="font-size: 12px; color: #666;">If you did not sign up, you can ignore this email.</p>
</body>
</html>
"""
