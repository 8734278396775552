"""Conversion between in-memory snapshots and the stored JSON document.

The stored shape nests children inside their parent, the same layout the
dashboard keeps in browser storage:

    {"version": 1,
     "categories": [{"id": ..., "name": ..., "parentId": ..., "children": [...],
                     "linkedIds": [{"id": ..., "name": ...}]}],
     "categoryData": {"<category id>": {"fields": [...], "data": [...]}}}
"""

from typing import Dict, List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

from models.category import Category, CategoryLink, CategoryTree
from models.category_data import (
    CategoryData,
    CategoryDataEntry,
    CategoryField,
    FieldOption,
)
from tools.links import add_link, drop_links_to, relabel_link
from tools.traversal import flatten
from logger import get_logger

logger = get_logger()

DOCUMENT_VERSION = 1


class CategoryLinkRecord(BaseModel):
    id: str
    name: str


class CategoryRecord(BaseModel):
    """Stored form of a category and its whole subtree."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    children: List["CategoryRecord"] = Field(default_factory=list)
    linked_ids: List[CategoryLinkRecord] = Field(default_factory=list, alias="linkedIds")


CategoryRecord.model_rebuild()


class FieldOptionRecord(BaseModel):
    id: str
    label: str


class CategoryFieldRecord(BaseModel):
    id: str
    type: Literal["single-select", "multi-select", "photo", "notes"]
    label: str
    options: List[FieldOptionRecord] = Field(default_factory=list)


class CategoryDataEntryRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_id: str = Field(alias="fieldId")
    value: Union[None, str, List[str]] = None


class CategoryDataRecord(BaseModel):
    fields: List[CategoryFieldRecord] = Field(default_factory=list)
    data: List[CategoryDataEntryRecord] = Field(default_factory=list)


class StoreDocument(BaseModel):
    """Top-level stored document."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = DOCUMENT_VERSION
    categories: List[CategoryRecord] = Field(default_factory=list)
    category_data: Dict[str, CategoryDataRecord] = Field(
        default_factory=dict, alias="categoryData"
    )


def tree_to_records(tree: CategoryTree) -> List[CategoryRecord]:
    """Nest the arena snapshot into stored records, preserving child order."""

    def build(category: Category) -> CategoryRecord:
        return CategoryRecord(
            id=category.id,
            name=category.name,
            parent_id=category.parent_id,
            children=[build(tree.nodes[child_id]) for child_id in category.children],
            linked_ids=[
                CategoryLinkRecord(id=link.id, name=link.name)
                for link in category.linked_ids
            ],
        )

    return [build(root) for root in tree.root_categories()]


def tree_from_records(records: List[CategoryRecord]) -> CategoryTree:
    """Rebuild an arena snapshot from stored records.

    Link entries are passed through repair_links().

    Raises:
        ValueError: If an ID repeats or a parentId disagrees with the nesting.
    """
    nodes: Dict[str, Category] = {}
    pending: List[Tuple[CategoryRecord, Optional[str]]] = [
        (record, None) for record in reversed(records)
    ]
    while pending:
        record, owner_id = pending.pop()
        if record.id in nodes:
            raise ValueError(f"Duplicate category ID in snapshot: {record.id}")
        if record.parent_id != owner_id:
            raise ValueError(
                f"Category {record.id} has parentId {record.parent_id!r} "
                f"but is stored under {owner_id!r}"
            )
        nodes[record.id] = Category(
            id=record.id,
            name=record.name,
            parent_id=record.parent_id,
            children=tuple(child.id for child in record.children),
            linked_ids=tuple(
                CategoryLink(id=link.id, name=link.name) for link in record.linked_ids
            ),
        )
        pending.extend((child, record.id) for child in reversed(record.children))

    tree = CategoryTree(nodes=nodes, roots=tuple(record.id for record in records))
    return repair_links(tree)


def repair_links(tree: CategoryTree) -> CategoryTree:
    """Bring stored cross-links back to a symmetric state.

    Entries pointing at missing categories are dropped. A link recorded on
    one side only is completed, and a pair with different labels takes the
    label of the endpoint that comes first in pre-order.
    """
    missing = {
        link.id
        for category in tree.nodes.values()
        for link in category.linked_ids
        if link.id not in tree
    }
    if missing:
        logger.warning(
            f"Dropping links to missing categories: {', '.join(sorted(missing))}"
        )
        tree = drop_links_to(tree, missing)

    for entry in flatten(tree):
        source = entry.category
        for link in tree.nodes[source.id].linked_ids:
            back = tree.nodes[link.id].link_to(source.id)
            if back is None:
                logger.warning(f"Completing one-sided link {source.id} -> {link.id}")
                tree = add_link(tree, source.id, link.id, link.name)
            elif back.name != link.name:
                logger.warning(
                    f"Link {source.id} <-> {link.id} has labels '{link.name}' "
                    f"and '{back.name}', keeping '{link.name}'"
                )
                tree = relabel_link(tree, source.id, link.id, link.name)
    return tree


def data_map_to_records(
    data_map: Dict[str, CategoryData],
) -> Dict[str, CategoryDataRecord]:
    return {
        category_id: CategoryDataRecord(
            fields=[
                CategoryFieldRecord(
                    id=f.id,
                    type=f.type,
                    label=f.label,
                    options=[FieldOptionRecord(id=o.id, label=o.label) for o in f.options],
                )
                for f in category_data.fields
            ],
            data=[
                CategoryDataEntryRecord(field_id=entry.field_id, value=entry.value)
                for entry in category_data.data
            ],
        )
        for category_id, category_data in data_map.items()
    }


def data_map_from_records(
    records: Dict[str, CategoryDataRecord],
) -> Dict[str, CategoryData]:
    return {
        category_id: CategoryData(
            fields=[
                CategoryField(
                    id=f.id,
                    type=f.type,
                    label=f.label,
                    options=[FieldOption(id=o.id, label=o.label) for o in f.options],
                )
                for f in record.fields
            ],
            data=[
                CategoryDataEntry(
                    field_id=entry.field_id,
                    value=list(entry.value) if isinstance(entry.value, list) else entry.value,
                )
                for entry in record.data
            ],
        )
        for category_id, record in records.items()
    }


def to_document(tree: CategoryTree, data_map: Dict[str, CategoryData]) -> dict:
    """Serialize a snapshot and its data store to a JSON-ready dict."""
    document = StoreDocument(
        categories=tree_to_records(tree),
        category_data=data_map_to_records(data_map),
    )
    return document.model_dump(mode="json", by_alias=True)


def from_document(raw: dict) -> Tuple[CategoryTree, Dict[str, CategoryData]]:
    """Validate a stored document and rebuild the snapshot and data store.

    Raises:
        ValueError: If the document is malformed (pydantic's ValidationError
            is a ValueError) or structurally inconsistent.
    """
    document = StoreDocument.model_validate(raw)
    if document.version != DOCUMENT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {document.version}")
    return (
        tree_from_records(document.categories),
        data_map_from_records(document.category_data),
    )
