"""Account requests: registration, login, profile changes."""

from __future__ import annotations

from dataclasses import dataclass, fields

from cloudmusic.packet import Packet, PacketType

INFO_SEPARATOR = "$"
ONLINE_NOTICE_IP = "10.24.6.228"


class RegistrationError(ValueError):
    """Raised when a registration form is incomplete or inconsistent."""


@dataclass
class Registration:
    """The fields of the registration form."""

    name: str = ""
    user_id: str = ""
    gender: str = ""
    phone: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""

    def validate(self) -> None:
        """Raise RegistrationError unless every field is filled and the passwords match."""
        missing = [item.name for item in fields(self) if not getattr(self, item.name)]
        if missing:
            raise RegistrationError(f"missing fields: {', '.join(missing)}")
        if self.password != self.password_confirm:
            raise RegistrationError("passwords do not match")

    def request(self) -> Packet:
        """Return the registration packet after validating the form."""
        self.validate()
        info = INFO_SEPARATOR.join(
            [self.name, self.user_id, self.gender, self.password, self.phone, self.email, ""]
        )
        return Packet(type=PacketType.REGISTER, info=info, name=self.name)


def login_request(user_id: str, password: str) -> Packet:
    """Return the login packet for ``user_id``."""
    info = INFO_SEPARATOR.join(["0", user_id, "0", password, "0", "0", "0"])
    return Packet(type=PacketType.LOGIN, info=info, name=user_id)


def online_notice(user_id: str, client_ip: str = ONLINE_NOTICE_IP) -> Packet:
    """Return the packet announcing that ``user_id`` is online after a login."""
    info = INFO_SEPARATOR.join(["", user_id, "", "", "", "", ""])
    return Packet(type=PacketType.ONLINE, info=info, name=user_id, ip=client_ip)


def profile_update(name: str, user_id: str, gender: str, phone: str, email: str) -> Packet:
    """Return the packet that saves edited profile details; the password is left empty."""
    info = INFO_SEPARATOR.join([name, user_id, gender, "", phone, email, ""])
    return Packet(type=PacketType.PROFILE, info=info, name=user_id)


def parse_assigned_id(info: str) -> str:
    """Return the id the server assigned: the text after the first space, or ''."""
    _, separator, rest = info.partition(" ")
    return rest if separator else ""