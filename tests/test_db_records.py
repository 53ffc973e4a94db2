"""Tests for the SQLAlchemy record adapter."""

import pytest
from sqlalchemy import ForeignKey, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship

from boundform.config import Settings
from boundform.db.records import ModelRecord, as_record
from boundform.forms.core import FormRenderer
from boundform.forms.errors import AmbiguousResource, AttributeNotFound
from boundform.forms.fields import FieldSpec
from boundform.forms.records import Record, identify


class Base(DeclarativeBase):
    pass


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), default="")


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), default="")
    type: Mapped[str] = mapped_column(String(20), default="post")
    author_id: Mapped[int | None] = mapped_column(ForeignKey("authors.id"), nullable=True)
    author: Mapped[Author | None] = relationship()

    __mapper_args__ = {"polymorphic_on": "type", "polymorphic_identity": "post"}


class Review(Post):
    __mapper_args__ = {"polymorphic_identity": "review"}


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


class TestModelRecord:
    def test_transient_is_new(self):
        record = ModelRecord(Post(title="Draft"))
        assert record.is_new is True
        assert record.record_id is None

    def test_persisted_is_not_new(self, session):
        post = Post(title="Hello")
        session.add(post)
        session.commit()

        record = ModelRecord(post)
        assert record.is_new is False
        assert record.record_id == post.id

    def test_pending_is_new(self, session):
        post = Post(title="Hello")
        session.add(post)
        assert ModelRecord(post).is_new is True

    def test_model_name(self):
        assert ModelRecord(Post()).model_name == "post"

    def test_get_attribute(self):
        assert ModelRecord(Post(title="Hi")).get_attribute("title") == "Hi"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeNotFound):
            ModelRecord(Post()).get_attribute("nope")

    def test_to_one_relationship_is_wrapped(self):
        post = Post(author=Author(name="Ada"))
        author = ModelRecord(post).get_attribute("author")
        assert isinstance(author, ModelRecord)
        assert author.get_attribute("name") == "Ada"

    def test_subclass_mapper_is_specialization(self):
        assert ModelRecord(Review()).is_specialization is True
        assert ModelRecord(Post()).is_specialization is False


class TestIdentifyModels:
    def test_new(self):
        assert identify(ModelRecord(Post())).url == "/posts"

    def test_persisted(self, session):
        post = Post(title="Hello")
        session.add(post)
        session.commit()
        assert identify(ModelRecord(post)).url == f"/posts/{post.id}"

    def test_single_table_subclass_is_ambiguous(self):
        with pytest.raises(AmbiguousResource):
            identify(ModelRecord(Review()))


class TestAsRecord:
    def test_wraps_mapped_instances(self):
        assert isinstance(as_record(Post()), ModelRecord)

    def test_leaves_other_objects(self):
        class Article(Record):
            pass

        article = Article()
        assert as_record(article) is article

    def test_idempotent(self):
        record = ModelRecord(Post())
        assert as_record(record) is record


class TestRenderModels:
    def test_renderer_accepts_mapped_instances(self, session):
        post = Post(title="Hello", author=Author(name="Ada"))
        session.add(post)
        session.commit()

        form = FormRenderer(settings=Settings()).render(
            post, [FieldSpec("title"), FieldSpec("author.name")]
        )
        assert form.action == f"/posts/{post.id}"
        assert 'name="post[title]" value="Hello"' in form.fields[0]
        assert 'name="post[author][name]" value="Ada"' in form.fields[1]
