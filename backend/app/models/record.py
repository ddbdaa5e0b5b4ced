"""
Modèle SQLAlchemy pour la table records.

Chaque ligne est un document JSON (cours, élève ou séance) identifié par son type.
Les inscriptions et les présences restent imbriquées dans le document, comme dans
le stockage local de l'ancien tableau de bord.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from app.database import Base


class Record(Base):
    __tablename__ = "records"

    seq = Column(Integer, primary_key=True, autoincrement=True)  # Ordre d'insertion
    id = Column(String(36), unique=True, nullable=False, index=True)
    kind = Column(String(20), nullable=False, index=True)        # course, student, event
    created_date = Column(DateTime(timezone=True), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
