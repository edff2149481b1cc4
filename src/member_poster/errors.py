"""Exceptions raised by the poster pipeline, member store and mailer."""


class PosterError(Exception):
    """Base exception for a failed poster job."""
    pass


class InputDecodeError(PosterError):
    """Template, logo or member photo is missing or not a decodable image."""
    pass


class GeometryError(PosterError):
    """A computed layout dimension would be zero or negative."""
    pass


class CompositeError(PosterError):
    """A layer failed to render or paste."""
    pass


class WriteError(PosterError):
    """The output target could not be written."""
    pass


class StoreError(Exception):
    """Base exception for member store failures."""
    pass


class MemberNotFoundError(StoreError):
    pass


class DuplicateMemberError(StoreError):
    pass


class MailError(Exception):
    """Base exception for mail dispatch failures."""
    pass


class MailConfigError(MailError):
    pass


class MailDeliveryError(MailError):
    pass
