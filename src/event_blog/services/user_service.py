"""
# User Service

Registration and login over the `users` collection. Email uniqueness is enforced by the
`email_unique` index installed by the provisioner, so two concurrent registrations with
the same email cannot both succeed: the loser gets `ConflictError`.
"""

import bcrypt

from event_blog.database.documents import parse_document
from event_blog.database.errors import ConflictError, InvalidCredentialsError
from event_blog.database.provisioner import USERS_COLLECTION, CollectionProvisioner
from event_blog.managers.logging_manager import get_logger
from event_blog.models.user_models import LoginRequest, RegisterRequest, User

logger = get_logger(prefix="[UserService]")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class UserService:
    """Service for registering and authenticating users."""

    def __init__(self, provisioner: CollectionProvisioner):
        self.provisioner = provisioner
        self.manager = provisioner.manager

    async def register_user(self, request: RegisterRequest) -> User:
        """
        Create a user with a bcrypt-hashed password.

        Raises:
            `ConflictError`: The email is already registered.
        """
        user = User(
            email=str(request.email),
            display_name=request.display_name or None,
            password_hash=hash_password(request.password),
            avatar_url=request.avatar_url or None,
        )
        user.updated_at = user.created_at

        collection = await self.provisioner.get_collection(USERS_COLLECTION)
        try:
            await self.manager.run(USERS_COLLECTION, "insert_one", collection.insert_one(user.to_document()))
        except ConflictError as e:
            logger.info("Registration rejected for duplicate email")
            raise ConflictError("email already registered", field="email") from e

        logger.info("Registered user %s", user.user_id)
        return user

    async def login_user(self, request: LoginRequest) -> User:
        """
        Return the user whose email and password match.

        Raises:
            `InvalidCredentialsError`: Unknown email or wrong password.
        """
        collection = await self.provisioner.get_collection(USERS_COLLECTION)
        query = {"email": str(request.email)}
        document = await self.manager.run(USERS_COLLECTION, "find_one", collection.find_one(query), query=query)
        if document is None or not verify_password(request.password, document.get("password_hash", "")):
            raise InvalidCredentialsError()
        return parse_document(User, document, USERS_COLLECTION, "find_one")
