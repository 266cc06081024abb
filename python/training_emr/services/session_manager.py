"""
Session Manager for Training EMR

Manages classroom accounts and the single active session: sign-in, sign-up,
sign-out, and the one-time demo account seed. The active session is persisted
in the local store so it survives a browser reload, and is handed to the
patient components as an explicit, read-only ``Session`` value.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from passlib.context import CryptContext

from training_emr.services.errors import EmailTaken, InvalidCredentials, InvalidEmail, PasswordMismatch, WeakPassword
from training_emr.services.local_store import LocalStore
from training_emr.data_generation.practice_data_generator import sample_patients
from training_emr.utils.helpers import generate_id
from training_emr.utils.validators import is_valid_email, normalize_email, validate_password, validate_password_match

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a stored hash; malformed hashes never verify"""
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        logger.warning("Stored password hash is not recognised")
        return False

@dataclass(frozen=True)
class Session:
    """The signed-in user, as persisted under the session key"""

    user_id: str
    name: str
    email: str

    def to_dict(self) -> Dict[str, str]:
        return {'userId': self.user_id, 'name': self.name, 'email': self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Session':
        return cls(user_id=data['userId'], name=data.get('name', ''), email=data.get('email', ''))

    @classmethod
    def for_user(cls, user: Dict[str, Any]) -> 'Session':
        return cls(user_id=user['id'], name=user['name'], email=user['email'])

class SessionManager:
    """Manages classroom accounts and the persisted session"""

    def __init__(self, store: LocalStore,
                 min_password_length: int = 8,
                 starter_patients: int = 2,
                 demo_name: str = "Demo Instructor",
                 demo_email: str = "demo@classroom.edu",
                 demo_password: str = "demo1234"):
        self.store = store
        self.min_password_length = min_password_length
        self.starter_patients = starter_patients
        self.demo_name = demo_name
        self.demo_email = demo_email
        self.demo_password = demo_password

    def find_user(self, email: str) -> Optional[Dict[str, Any]]:
        """Look up a user by case-insensitive email"""
        wanted = normalize_email(email)
        for user in self.store.get_users():
            if normalize_email(user.get('email', '')) == wanted:
                return user
        return None

    def get_active_session(self) -> Optional[Session]:
        """Session persisted by an earlier sign-in, if any"""
        data = self.store.get_session()
        if not data:
            return None
        try:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return Session.from_dict(data)
        except (KeyError, TypeError) as e:
            logger.warning(f"Discarding malformed persisted session: {e}")
            self.store.clear_session()
            return None

    def sign_in(self, email: str, password: str) -> Session:
        """
        Authenticate an existing account

        Args:
            email: Account email (any casing, surrounding whitespace ignored)
            password: Plain-text password

        Returns:
            The new active session

        Raises:
            InvalidCredentials: unknown email or wrong password
        """
        user = self.find_user(email)
        if user is None or not verify_password(password, user.get('password', '')):
            logger.info("Sign-in rejected")
            raise InvalidCredentials()

        session = Session.for_user(user)
        self.store.set_session(session.to_dict())
        logger.info(f"User {user['id']} signed in")
        return session

    def sign_up(self, name: str, email: str, password: str, confirm_password: str) -> Session:
        """
        Create an account, seed its starter charts and sign it in

        Raises:
            InvalidEmail: blank or malformed email
            WeakPassword: password shorter than the configured minimum
            PasswordMismatch: confirmation differs from the password
            EmailTaken: an account already uses this email (case-insensitive)
        """
        if not is_valid_email(email):
            raise InvalidEmail()

        ok, message = validate_password(password, self.min_password_length)
        if not ok:
            raise WeakPassword(message)

        ok, message = validate_password_match(password, confirm_password)
        if not ok:
            raise PasswordMismatch(message)

        users = self.store.get_users()
        wanted = normalize_email(email)
        if any(normalize_email(u.get('email', '')) == wanted for u in users):
            raise EmailTaken()

        user = {
            'id': generate_id(),
            'name': (name or "").strip() or "Student",
            'email': (email or "").strip(),
            'password': hash_password(password),
        }
        users.append(user)
        self.store.set_users(users)

        self.store.set_patients(user['id'], sample_patients()[:self.starter_patients])

        session = Session.for_user(user)
        self.store.set_session(session.to_dict())
        logger.info(f"User {user['id']} signed up")
        return session

    def sign_out(self) -> None:
        self.store.clear_session()
        logger.info("Session cleared")

    def seed_demo_account(self) -> bool:
        """
        Create the demo account with the sample charts unless it already exists

        Returns:
            True if the account was inserted by this call
        """
        if self.find_user(self.demo_email) is not None:
            return False

        users = self.store.get_users()
        demo_user = {
            'id': generate_id(),
            'name': self.demo_name,
            'email': self.demo_email,
            'password': hash_password(self.demo_password),
        }
        users.append(demo_user)
        self.store.set_users(users)
        self.store.set_patients(demo_user['id'], sample_patients())

        logger.info(f"Seeded demo account {self.demo_email}")
        return True
