"""Factories for generating fake user data for testing."""

from datetime import datetime, timezone
from typing import Optional

from faker import Faker

from idgate.domain.entities.user import NewUser, User
from idgate.utils.security import generate_salt, hash_password

fake = Faker()

TEST_ROUNDS = 1000


def create_fake_user(
    id: Optional[int] = None,
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
    sysadmin_flag: bool = False,
    reset_uuid: Optional[str] = None,
) -> User:
    """Create a fake User entity.

    When ``password`` is given the user gets a real salt and hash, otherwise
    the user has no local credentials.
    """
    salt = hashed_password = None
    if password is not None:
        salt = generate_salt()
        hashed_password = hash_password(password, salt, rounds=TEST_ROUNDS)
    now = datetime.now(timezone.utc)
    return User(
        id=id if id is not None else fake.random_int(min=1, max=10000),
        username=username if username is not None else fake.user_name(),
        email=email if email is not None else fake.email(),
        realname=fake.name(),
        hashed_password=hashed_password,
        salt=salt,
        sysadmin_flag=sysadmin_flag,
        reset_uuid=reset_uuid,
        creation_time=now,
        update_time=now,
    )


def create_new_user(
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = "Correct-Horse-9",
    sysadmin_flag: bool = False,
) -> NewUser:
    return NewUser(
        username=username if username is not None else fake.unique.user_name(),
        email=email if email is not None else fake.unique.email(),
        realname=fake.name(),
        password=password,
        sysadmin_flag=sysadmin_flag,
    )
