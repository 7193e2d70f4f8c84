"""Assignment repository - Database operations for musician assignments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Assignment


class AssignmentRepository:
    """Repository for assignment database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(Assignment).options(joinedload(Assignment.user), joinedload(Assignment.instrument))

    @classmethod
    def list_assignments(cls, db: Session, user_id: Optional[str] = None) -> list[Assignment]:
        """All assignments, or one user's, most recently invited first"""
        query = cls._with_relations(db)
        if user_id:
            query = query.filter(Assignment.user_id == user_id)
        return query.order_by(Assignment.invited_at.desc()).all()

    @classmethod
    def list_by_set(cls, db: Session, set_id: str) -> list[Assignment]:
        return cls._with_relations(db).filter(Assignment.set_id == set_id).order_by(Assignment.invited_at.asc()).all()

    @staticmethod
    def get_by_id(db: Session, assignment_id: str) -> Optional[Assignment]:
        return db.query(Assignment).filter(Assignment.id == assignment_id).first()

    @staticmethod
    def count_for_instrument(db: Session, set_id: str, instrument_id: str) -> int:
        return (
            db.query(Assignment)
            .filter(Assignment.set_id == set_id, Assignment.instrument_id == instrument_id)
            .count()
        )

    @staticmethod
    def find(db: Session, set_id: str, instrument_id: str, user_id: str) -> Optional[Assignment]:
        return (
            db.query(Assignment)
            .filter(
                Assignment.set_id == set_id,
                Assignment.instrument_id == instrument_id,
                Assignment.user_id == user_id,
            )
            .first()
        )

    @staticmethod
    def delete_for_instrument(db: Session, set_id: str, instrument_id: str) -> int:
        """Stage removal of every assignment of an instrument in a set"""
        return (
            db.query(Assignment)
            .filter(Assignment.set_id == set_id, Assignment.instrument_id == instrument_id)
            .delete(synchronize_session="fetch")
        )

    @staticmethod
    def add(db: Session, **data) -> Assignment:
        """Stage an assignment without committing"""
        assignment = Assignment(**data)
        db.add(assignment)
        return assignment
