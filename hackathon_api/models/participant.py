import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hackathon_api.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Participant(Base):
    __tablename__ = "participants"

    id = Column(String(36), primary_key=True, default=_new_id)

    # Personal information
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone_number = Column(String(10), nullable=False)

    # Education information
    college_name = Column(String, nullable=False)
    degree = Column(String, nullable=False, index=True)
    year_of_study = Column(String, nullable=False, index=True)
    cgpa = Column(Float, nullable=False)

    # Skills / project
    other_skills = Column(Text, nullable=True)
    project_idea = Column(Text, nullable=True)

    # Social profiles (format-checked only)
    github = Column(String, nullable=True)
    linkedin = Column(String, nullable=True)

    registration_date = Column(DateTime, default=datetime.now, nullable=False, index=True)
    verification_status = Column(String, default="pending", nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    tech_tags = relationship(
        "ParticipantTechTag",
        back_populates="participant",
        cascade="all, delete-orphan",
        order_by="ParticipantTechTag.position",
    )

    @property
    def tech_stack(self) -> list[str]:
        return [tag.tag for tag in self.tech_tags]

    @tech_stack.setter
    def tech_stack(self, tags: list[str]) -> None:
        self.tech_tags = [
            ParticipantTechTag(tag=tag, position=index)
            for index, tag in enumerate(tags)
        ]


class ParticipantTechTag(Base):
    __tablename__ = "participant_tech_tags"

    id = Column(Integer, primary_key=True, index=True)
    participant_id = Column(
        String(36),
        ForeignKey("participants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag = Column(String, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    participant = relationship("Participant", back_populates="tech_tags")
