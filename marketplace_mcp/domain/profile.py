"""
Credential domain objects read from the up CLI configuration.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class Token:
    """A session token taken from an up CLI profile."""
    access_token: str
    token_type: str = "Session"


@dataclass(frozen=True)
class Profile:
    """One named entry of the up CLI ``profiles`` map."""
    id: str = ""
    profile_type: str = ""
    type: str = ""
    session: str = ""
    account: str = ""
    organization: str = ""
    domain: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Profile':
        return cls(
            id=data.get('id') or '',
            profile_type=data.get('profileType') or '',
            type=data.get('type') or '',
            session=data.get('session') or '',
            account=data.get('account') or '',
            organization=data.get('organization') or '',
            domain=data.get('domain') or '',
        )

    @property
    def has_session(self) -> bool:
        return bool(self.session)

    def to_dict(self) -> Dict[str, Any]:
        # The session itself is never echoed back
        return {
            'id': self.id,
            'profile_type': self.profile_type,
            'type': self.type,
            'account': self.account,
            'organization': self.organization,
            'domain': self.domain,
            'has_session': self.has_session,
        }
