"""Shared fixtures for erdkit tests."""

import json

import pytest

from erdkit.domain import (
    Attribute,
    Cardinality,
    Domain,
    Entity,
    Relationship,
    Specialization,
    SpecializationKind,
)


@pytest.fixture
def shop_domain():
    """User 1-* Order (direct), Order *-* Address (indirect), Guest disconnected."""
    user = Entity("User", (
        Attribute("id", "integer", primary_key=True),
        Attribute("name", "string"),
        Attribute("email", "string"),
        Attribute("created_at", "datetime"),
        Attribute("updated_at", "datetime"),
    ))
    order = Entity("Order", (
        Attribute("id", "integer", primary_key=True),
        Attribute("user_id", "integer", foreign_key=True),
        Attribute("total", "decimal"),
        Attribute("created_at", "datetime"),
    ))
    address = Entity("Address", (
        Attribute("id", "integer", primary_key=True),
        Attribute("street", "string"),
    ))
    guest = Entity("Guest", (Attribute("id", "integer", primary_key=True),))

    return Domain(
        "Shop",
        entities=[user, order, address, guest],
        relationships=[
            Relationship(user, order, Cardinality.ONE_TO_MANY),
            Relationship(order, address, Cardinality.MANY_TO_MANY, indirect=True),
        ],
    )


@pytest.fixture
def fleet_domain():
    """Vehicle <|- Car (inheritance), Commentable <|- Post (polymorphic), Garage 1-* Vehicle."""
    vehicle = Entity("Vehicle", (
        Attribute("id", "integer", primary_key=True),
        Attribute("type", "string", inheritance=True),
        Attribute("wheels", "integer"),
    ))
    car = Entity("Car", (
        Attribute("id", "integer", primary_key=True),
        Attribute("wheels", "integer"),
    ))
    garage = Entity("Garage", (
        Attribute("id", "integer", primary_key=True),
    ))
    commentable = Entity("Commentable")
    post = Entity("Post", (Attribute("body", "text"),))

    return Domain(
        "Fleet",
        entities=[vehicle, car, garage, commentable, post],
        relationships=[
            Relationship(garage, vehicle, Cardinality.ONE_TO_MANY),
        ],
        specializations=[
            Specialization(vehicle, car, SpecializationKind.INHERITANCE),
            Specialization(commentable, post, SpecializationKind.POLYMORPHIC),
        ],
    )


@pytest.fixture
def shop_document():
    """Domain document equivalent to the shop domain."""
    return {
        "name": "Shop",
        "entities": [
            {
                "name": "User",
                "attributes": [
                    {"name": "id", "type": "integer", "primaryKey": True},
                    {"name": "name", "type": "string"},
                    {"name": "created_at", "type": "datetime"},
                ],
            },
            {
                "name": "Order",
                "attributes": [
                    {"name": "id", "type": "integer", "primaryKey": True},
                    {"name": "user_id", "type": "integer", "foreignKey": True},
                ],
            },
            {"name": "Address", "attributes": [{"name": "street", "type": "string"}]},
        ],
        "relationships": [
            {"source": "User", "destination": "Order", "cardinality": "one_to_many"},
            {"source": "Order", "destination": "Address", "cardinality": "many_to_many", "indirect": True},
        ],
        "specializations": [],
    }


@pytest.fixture
def shop_document_file(tmp_path, shop_document):
    """Shop domain document written to disk."""
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(shop_document), encoding="utf-8")
    return path
