from sqlalchemy import Column, Integer, String, Text, Float, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# 날짜/시간 컬럼은 ISO-8601 문자열(UTC)로 저장


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(10), default="user", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(String(40), nullable=False)
    last_login = Column(String(40))
    login_attempts = Column(Integer, default=0, nullable=False)
    lock_until = Column(String(40))
    password_reset_token = Column(String(64), index=True)
    password_reset_expires = Column(String(40))

    # profile
    age = Column(Integer)
    gender = Column(String(10))
    height = Column(Float)
    weight = Column(Float)
    health_conditions = Column(Text)
    fitness_goal = Column(String(30))
    profile_image = Column(Text)


class Plan(Base):
    __tablename__ = "plans"
    __table_args__ = (UniqueConstraint("user_id", "plan_type", name="uq_plans_user_type"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    plan_type = Column(String(10), nullable=False)  # 'diet' | 'workout'
    data = Column(Text, nullable=False)
    updated_at = Column(String(40), nullable=False)


class PlanMetadata(Base):
    __tablename__ = "plan_metadata"
    __table_args__ = (UniqueConstraint("user_id", "plan_type", name="uq_plan_metadata_user_type"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    plan_type = Column(String(10), nullable=False)
    start_date = Column(String(40), nullable=False)
    current_week = Column(Integer, default=1, nullable=False)
    renewal_date = Column(String(40), nullable=False)
    total_weeks = Column(Integer, nullable=False)
    last_renewal_date = Column(String(40))
    # 마지막으로 주차를 올린 갱신의 식별자
    renewal_token = Column(String(32))


class PlanArchive(Base):
    __tablename__ = "plan_archives"
    __table_args__ = (UniqueConstraint("user_id", "plan_type", "week", name="uq_plan_archives_week"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    plan_type = Column(String(10), nullable=False)
    week = Column(Integer, nullable=False)
    plan = Column(Text, nullable=False)
    meta = Column(Text, nullable=False)
    completed_date = Column(String(40), nullable=False)


class ProgressCache(Base):
    __tablename__ = "progress_cache"
    __table_args__ = (UniqueConstraint("user_id", "kind", name="uq_progress_user_kind"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    kind = Column(String(10), nullable=False)  # 'diet' | 'workout'
    period = Column(String(20), nullable=False)
    data = Column(Text, nullable=False)


class Cart(Base):
    __tablename__ = "carts"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    items = Column(Text, nullable=False, default="[]")


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    data = Column(Text, nullable=False)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    type = Column(String(20), nullable=False)
    week = Column(Integer)
    title = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(String(40), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)


class Reminder(Base):
    __tablename__ = "reminders"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    enabled = Column(Boolean, default=False, nullable=False)
    time = Column(String(5), nullable=False)
    scheduled_at = Column(String(40), nullable=False)


class FitnessProgram(Base):
    __tablename__ = "fitness_programs"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    data = Column(Text, nullable=False)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    caption = Column(String(300))
    image_url = Column(String(255), nullable=False)
    created_at = Column(String(40), nullable=False)


class PostLike(Base):
    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)


class PostComment(Base):
    __tablename__ = "post_comments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    text = Column(String(500), nullable=False)
    created_at = Column(String(40), nullable=False)
