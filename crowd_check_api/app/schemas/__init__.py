"""
Pydantic schema definitions for every entity kind.

Each kind has an insertable shape (``<Kind>Create``, no ``id``) and a
stored shape (``<Kind>``, carrying the store-assigned ``id``).  The
same models serve as store records and API payloads; on the wire they
use camelCase field names.
"""
