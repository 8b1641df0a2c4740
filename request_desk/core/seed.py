from ..schemas.entities import Account, Department, Snapshot


def seed_accounts() -> list[Account]:
    """
    Default accounts for a fresh store.
    - One verified Admin and one verified User.
    """
    seeds = [
        {
            "firstName": "French Cyril",
            "lastName": "Sambilad",
            "email": "admin@example.com",
            "password": "Password123!",
            "role": "Admin",
            "verified": True,
        },
        {
            "firstName": "Regular",
            "lastName": "User",
            "email": "user@example.com",
            "password": "user123",
            "role": "User",
            "verified": True,
        },
    ]
    return [Account.model_validate(s) for s in seeds]


def seed_departments() -> list[Department]:
    seeds = [
        dict(id=1, name="Engineering", description="Software Development Team"),
        dict(id=2, name="HR", description="Human Resources Department"),
        dict(id=3, name="Marketing", description="Marketing and Communications"),
    ]
    return [Department(**s) for s in seeds]


def seed_snapshot() -> Snapshot:
    return Snapshot(
        accounts=seed_accounts(),
        departments=seed_departments(),
        employees=[],
        requests=[],
    )
