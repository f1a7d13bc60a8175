"""Talk bounded context.

Owns talk rooms: the relational identity row that proves a room exists and
the document-store projections (room, card, events) that carry its state.
"""
