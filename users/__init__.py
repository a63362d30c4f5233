"""Users app.

Attaches a display profile (name, phone, image URL) to Django's built-in
`auth.User`.  Messaging reads these fields when rendering senders and the
other participant of a conversation.
"""
