"""Functional core: descriptors, records and result types. No I/O, no ORM."""
