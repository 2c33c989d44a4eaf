"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every resource uses
(DB wiring, settings, logging, error rendering). Keep resource-specific SQL
and validation in the corresponding resource package (e.g. `users/`).
"""
