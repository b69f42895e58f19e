from datetime import datetime, timezone

from solsays import db


def _utcnow():
    return datetime.now(timezone.utc)


class LeaderboardEntry(db.Model):
    __tablename__ = 'leaderboard_entry'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    @classmethod
    def top(cls, limit=10):
        return cls.query.order_by(cls.score.desc(), cls.updated_at.asc()).limit(limit).all()

    def rank(self) -> int:
        return LeaderboardEntry.query.filter(LeaderboardEntry.score > self.score).count() + 1

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'score': self.score,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
