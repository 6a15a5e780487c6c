from __future__ import annotations

import secrets
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.application.use_cases.users.login_user import LoginUserUseCase
from authcore.application.use_cases.users.register_user import (
    RegisterUserInput,
    RegisterUserUseCase,
)
from authcore.domain.users.entities import SessionToken, User
from authcore.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from authcore.domain.users.repositories import (
    PasswordHasher,
    SessionTokenRepository,
    UserRepository,
)
from authcore.shared.errors import MissingFieldsError, PasswordHashingError, StoreError


class InMemoryUserRepository(UserRepository):
    """Enforces username uniqueness on insert, like the real unique index."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1
        self._lock = threading.Lock()
        self.add_calls = 0

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            return self._users.get(username)

    def add(self, user: User) -> User:
        with self._lock:
            self.add_calls += 1
            if user.username in self._users:
                raise UserAlreadyExistsError()
            new_user = User(
                id=self._seq,
                username=user.username,
                full_name=user.full_name,
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            self._seq += 1
            self._users[new_user.username] = new_user
            return new_user

    def count(self) -> int:
        return len(self._users)


class RacingUserRepository(InMemoryUserRepository):
    """Holds every lookup until ``parties`` callers have all seen "not found"."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=5)

    def find_by_username(self, username: str) -> User | None:
        found = super().find_by_username(username)
        self._barrier.wait()
        return found


class StalePrecheckRepository(InMemoryUserRepository):
    def find_by_username(self, username: str) -> User | None:
        return None


class BrokenLookupRepository(InMemoryUserRepository):
    def find_by_username(self, username: str) -> User | None:
        raise StoreError("connection reset")


class InMemoryTokenRepository(SessionTokenRepository):
    def __init__(self) -> None:
        self.issued: list[SessionToken] = []

    def issue(self, user_id: int) -> SessionToken:
        token = SessionToken(
            user_id=user_id,
            token=secrets.token_urlsafe(48),
            expires_at=datetime.now(UTC) + timedelta(days=7),
        )
        self.issued.append(token)
        return token


class ExplodingHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        raise PasswordHashingError()

    def verify(self, password: str, hashed: str) -> bool:
        return False


def _alice(**overrides: str) -> RegisterUserInput:
    data = {
        "username": "alice",
        "full_name": "Alice A",
        "password": "p@ss",
        "email": "a@x.com",
    }
    data.update(overrides)
    return RegisterUserInput(**data)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


def test_register_user_success(
    users: InMemoryUserRepository, fast_hasher: WerkzeugPasswordHasher
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)

    user = use_case.execute(_alice())

    assert user.id == 1
    assert user.username == "alice"
    assert user.full_name == "Alice A"
    assert user.email == "a@x.com"
    assert user.password_hash != "p@ss"
    assert fast_hasher.verify("p@ss", user.password_hash)
    assert users.find_by_username("alice") == user


@pytest.mark.parametrize(
    ("field", "wire_name"),
    [
        ("username", "username"),
        ("full_name", "fullName"),
        ("password", "password"),
        ("email", "email"),
    ],
)
def test_register_user_rejects_empty_field(
    users: InMemoryUserRepository,
    fast_hasher: WerkzeugPasswordHasher,
    field: str,
    wire_name: str,
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)

    with pytest.raises(MissingFieldsError) as excinfo:
        use_case.execute(_alice(**{field: ""}))

    assert excinfo.value.context == {"fields": [wire_name]}
    assert users.add_calls == 0


def test_register_user_duplicate_raises(
    users: InMemoryUserRepository, fast_hasher: WerkzeugPasswordHasher
) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)
    use_case.execute(_alice())

    with pytest.raises(UserAlreadyExistsError):
        use_case.execute(_alice(password="other", email="b@x.com"))

    assert users.count() == 1
    assert users.add_calls == 1


def test_register_conflict_on_insert_is_authoritative(
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    users = StalePrecheckRepository()
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)
    use_case.execute(_alice())

    with pytest.raises(UserAlreadyExistsError):
        use_case.execute(_alice())

    assert users.count() == 1


def test_register_lookup_failure_never_inserts(fast_hasher: WerkzeugPasswordHasher) -> None:
    users = BrokenLookupRepository()
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)

    with pytest.raises(StoreError):
        use_case.execute(_alice())

    assert users.add_calls == 0


def test_register_hash_failure_aborts_before_write(users: InMemoryUserRepository) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=ExplodingHasher())

    with pytest.raises(PasswordHashingError):
        use_case.execute(_alice())

    assert users.add_calls == 0


def test_concurrent_registration_yields_single_account(
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    users = RacingUserRepository(parties=2)
    use_case = RegisterUserUseCase(users=users, password_hasher=fast_hasher)

    def attempt() -> str:
        try:
            use_case.execute(_alice())
        except UserAlreadyExistsError:
            return "conflict"
        return "created"

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = sorted(pool.map(lambda _: attempt(), range(2)))

    assert outcomes == ["conflict", "created"]
    assert users.count() == 1
    assert users.add_calls == 2


def test_login_user_success(
    users: InMemoryUserRepository,
    tokens: InMemoryTokenRepository,
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    RegisterUserUseCase(users=users, password_hasher=fast_hasher).execute(_alice())
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=fast_hasher)

    result = login.execute("alice", "p@ss")

    assert result.user.username == "alice"
    assert result.user.email == "a@x.com"
    assert result.session.token
    assert len(result.session.token) >= 32
    assert result.session.user_id == result.user.id
    assert tokens.issued == [result.session]


def test_login_tokens_are_unique_per_login(
    users: InMemoryUserRepository,
    tokens: InMemoryTokenRepository,
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    RegisterUserUseCase(users=users, password_hasher=fast_hasher).execute(_alice())
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=fast_hasher)

    first = login.execute("alice", "p@ss").session.token
    second = login.execute("alice", "p@ss").session.token

    assert first != second


def test_wrong_password_and_unknown_user_are_indistinguishable(
    users: InMemoryUserRepository,
    tokens: InMemoryTokenRepository,
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    RegisterUserUseCase(users=users, password_hasher=fast_hasher).execute(_alice())
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=fast_hasher)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("bob", "p@ss")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status == 401
    assert tokens.issued == []


def test_login_with_empty_credentials_is_rejected(
    users: InMemoryUserRepository,
    tokens: InMemoryTokenRepository,
    fast_hasher: WerkzeugPasswordHasher,
) -> None:
    RegisterUserUseCase(users=users, password_hasher=fast_hasher).execute(_alice())
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=fast_hasher)

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice", "")
    with pytest.raises(InvalidCredentialsError):
        login.execute("", "p@ss")


def test_login_store_failure_is_not_reported_as_bad_credentials(
    tokens: InMemoryTokenRepository, fast_hasher: WerkzeugPasswordHasher
) -> None:
    login = LoginUserUseCase(
        users=BrokenLookupRepository(), tokens=tokens, password_hasher=fast_hasher
    )

    with pytest.raises(StoreError):
        login.execute("alice", "p@ss")
