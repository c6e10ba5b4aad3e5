"""
Collaborator failures for the account opening workflow.

The account opening service never raises these itself. They are raised by the
simulated collaborators (background check, reference ids, repository, event
publisher) and travel through the service untouched, so the caller sees
exactly what the collaborator raised.

Only the HTTP layer translates them, by mapping each class to a status code.
"""


class CollaboratorError(Exception):
    """Base mixin for failures raised by an account opening collaborator."""


class BackgroundCheckError(CollaboratorError, IOError):
    """The background check provider could not be reached or failed."""


class ReferenceIdCollisionError(CollaboratorError, RuntimeError):
    """A generated account id was already issued."""


class AccountStoreError(CollaboratorError, RuntimeError):
    """Account data could not be written."""


class NotificationError(CollaboratorError, RuntimeError):
    """The AccountOpened event could not be published."""
