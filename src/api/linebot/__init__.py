"""LINE bot bounded context.

Composes Identity and Talk to turn inbound LINE messages into talk room
events.
"""
