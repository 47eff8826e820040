"""
Account entities: the signed-in admin and the platform's users.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from models.learning import entity_id

USER_STATUSES = ('active', 'blocked')


@dataclass
class AdminUser:
    id: Optional[str] = None
    full_name: str = ''
    email: str = ''
    role: str = 'admin'
    created_at: str = ''
    last_login: str = ''
    profile_image: str = ''
    status: str = 'active'

    @classmethod
    def from_api(cls, data: Optional[Dict]) -> Optional['AdminUser']:
        if not data:
            return None
        return cls(
            id=entity_id(data),
            full_name=data.get('fullName') or data.get('name') or '',
            email=data.get('email') or '',
            role=data.get('role') or 'admin',
            created_at=data.get('createdAt') or '',
            last_login=data.get('lastLogin') or '',
            profile_image=data.get('profileImage') or '',
            status=data.get('status') or 'active',
        )

    def to_snapshot(self) -> Dict:
        """The JSON-able copy kept in the session for fast rendering."""
        return {
            '_id': self.id,
            'fullName': self.full_name,
            'email': self.email,
            'role': self.role,
            'createdAt': self.created_at,
            'lastLogin': self.last_login,
            'profileImage': self.profile_image,
            'status': self.status,
        }


@dataclass
class PlatformUser:
    id: Optional[str] = None
    full_name: str = ''
    email: str = ''
    role: str = 'learner'
    created_at: str = ''
    status: str = 'active'

    @classmethod
    def from_api(cls, data: Dict) -> 'PlatformUser':
        status = (data.get('status') or 'active').lower()
        return cls(
            id=entity_id(data),
            full_name=data.get('fullName') or '',
            email=data.get('email') or '',
            role='admin' if data.get('role') == 'admin' else 'learner',
            created_at=data.get('createdAt') or '',
            status=status if status in USER_STATUSES else 'active',
        )

    @property
    def is_blocked(self) -> bool:
        return self.status == 'blocked'

    @property
    def toggled_status(self) -> str:
        return 'active' if self.is_blocked else 'blocked'
