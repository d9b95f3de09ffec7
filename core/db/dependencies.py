from typing import Iterator

from sqlalchemy.orm import Session
from core.db.session import SessionLocal


def get_db() -> Iterator[Session]:
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        # Discard uncommitted work from a failed request
        db.rollback()
        raise
    finally:
        db.close()
