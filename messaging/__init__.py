"""
Direct messaging between marketplace users.

Conversations are resolved per user pair, messages carry read state and
are pushed to connected receivers over Channels.
"""
