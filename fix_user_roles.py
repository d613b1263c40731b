from sqlalchemy import text
from app.db.session import engine


def fix_user_roles():
    with engine.connect() as connection:
        result = connection.execute(text("SELECT DISTINCT role FROM users"))
        print("Current roles:", [row[0] for row in result])

        # Role is stored as VARCHAR holding the enum name; rows imported from
        # the resident directory may carry lowercase or prefixed values.
        updates = [
            ("guest", "GUEST"),
            ("user", "USER"),
            ("admin", "ADMIN"),
            ("god", "GOD"),
            ("Role_ADMIN", "ADMIN"),
            ("Role_GOD", "GOD"),
        ]

        for old, new in updates:
            connection.execute(
                text("UPDATE users SET role = :new WHERE role = :old"),
                {"new": new, "old": old}
            )

        connection.commit()
        print("Updated user roles.")

        result = connection.execute(text("SELECT DISTINCT role FROM users"))
        print("New roles:", [row[0] for row in result])

    # Now try ORM
    from sqlalchemy.orm import sessionmaker
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    try:
        from app.models.user import User
        u = db.query(User).first()
        print(f"ORM loaded user: {u.username if u else 'None'} Role: {u.role if u else 'None'}")
    finally:
        db.close()


if __name__ == "__main__":
    fix_user_roles()
