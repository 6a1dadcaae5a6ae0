from dataclasses import dataclass


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "You're Invited to Our Wedding!"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #d4a373;">Save the Date!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p>We are delighted to invite you to our {event_title}!</p>

        <div style="background-color: #fefae0; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <p><strong>Date:</strong> {event_date}</p>
            <p><strong>Location:</strong> {event_location}</p>
        </div>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #d4a373; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                RSVP Now
            </a>
        </div>

        <p>We kindly ask that you respond by {response_deadline}.</p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    INVITATION_TEXT = """
    Dear {guest_name},

    We are delighted to invite you to our {event_title}!

    - Date: {event_date}
    - Location: {event_location}

    Please let us know if you can attend by visiting:
    {rsvp_url}

    We kindly ask that you respond by {response_deadline}.

    With love,
    {couple_names}
    """

    REMINDER_SUBJECT = "Reminder: please RSVP for {event_title}"
    REMINDER_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Dear {guest_name},</p>

        <p>We haven't heard back from you yet about our {event_title} on {event_date}.</p>

        <p>Please let us know whether you can make it by {response_deadline}:</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #d4a373; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                RSVP Now
            </a>
        </div>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    REMINDER_TEXT = """
    Dear {guest_name},

    We haven't heard back from you yet about our {event_title} on {event_date}.

    Please let us know whether you can make it by {response_deadline}:
    {rsvp_url}

    With love,
    {couple_names}
    """
