"""Late check-in penalty service.

Feature modules (attendance, events, ledger, users, notifications) each keep a
plain model, a repository interface and a MySQL repository. The check-in
processor in ``attendance`` composes them; a thin Flask controller exposes it
as the trigger endpoint.
"""
