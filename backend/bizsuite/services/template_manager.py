# backend/bizsuite/services/template_manager.py
import logging
import threading
import time
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from bizsuite.schemas.template import (
    DocumentTemplate,
    DocumentTemplateUpdate,
    DocumentTypeEnum,
    TemplateDesign,
)
from bizsuite.services.default_templates import default_templates

logger = logging.getLogger(__name__)

# Fields a caller may change through update_template
UPDATABLE_FIELDS = ("name", "description", "design")


class TemplateManager:
    """
    In-memory registry of document templates.

    Holds every template by id (insertion order) plus one active template id per
    document type. Every registration is forwarded to the document generator so
    it can resolve templates at render time. Nothing is persisted.

    Mutations never raise: they report failure with False / None.
    """

    def __init__(self, pdf_service: Optional[Any] = None, *, include_extended_defaults: bool = False, seed_defaults: bool = True):
        self._pdf_service = pdf_service
        self._templates: Dict[str, DocumentTemplate] = {}
        self._active_templates: Dict[DocumentTypeEnum, str] = {}
        self._lock = threading.RLock()
        self._last_id = 0
        if seed_defaults:
            self.initialize(include_extended=include_extended_defaults)

    def initialize(self, include_extended: bool = False) -> None:
        """Register the built-in templates; each becomes active for its type."""
        for template in default_templates(include_extended):
            self.register_template(template)
        logger.info(f"Template registry seeded with {len(self._templates)} built-in templates")

    # --- Lookups ---
    def get_template(self, template_id: str) -> Optional[DocumentTemplate]:
        return self._templates.get(template_id)

    def get_all_templates(self) -> List[DocumentTemplate]:
        return list(self._templates.values())

    def get_templates_by_type(self, doc_type: DocumentTypeEnum) -> List[DocumentTemplate]:
        return [t for t in self._templates.values() if t.type == doc_type]

    def get_active_template(self, doc_type: DocumentTypeEnum) -> Optional[DocumentTemplate]:
        active_id = self._active_templates.get(doc_type)
        return self._templates.get(active_id) if active_id else None

    # --- Mutations ---
    def register_template(self, template: DocumentTemplate) -> None:
        """
        Insert or overwrite a template by id.
        Active or default templates take over the active slot for their type.
        """
        with self._lock:
            previous = self._templates.get(template.id)
            self._templates[template.id] = template
            self._forward(template)
            if previous is not None and previous.type != template.type:
                if self._active_templates.get(previous.type) == template.id:
                    self._release_active_slot(previous.type)
            if template.is_active or template.is_default:
                self.set_active_template(template.type, template.id)

    def set_active_template(self, doc_type: DocumentTypeEnum, template_id: str) -> bool:
        with self._lock:
            template = self._templates.get(template_id)
            if template is None or template.type != doc_type:
                logger.debug(f"Cannot activate template '{template_id}' for type '{doc_type}'")
                return False

            self._active_templates[doc_type] = template_id
            # is_default marks the seeded built-ins only; activation never moves it
            for sibling in self._templates.values():
                if sibling.type == doc_type:
                    sibling.is_active = sibling.id == template_id

            self._forward(template)
            return True

    def delete_template(self, template_id: str) -> bool:
        with self._lock:
            template = self._templates.get(template_id)
            if template is None or template.is_default:
                return False

            del self._templates[template_id]
            if self._pdf_service is not None:
                self._pdf_service.unregister_template(template_id)

            if template.is_active:
                self._release_active_slot(template.type)

            logger.info(f"Deleted template '{template.name}' ({template_id})")
            return True

    def _release_active_slot(self, doc_type: DocumentTypeEnum) -> None:
        """The slot's template is gone from this type: promote the first remaining one, or clear it."""
        alternatives = self.get_templates_by_type(doc_type)
        if alternatives:
            self.set_active_template(doc_type, alternatives[0].id)
            return
        self._active_templates.pop(doc_type, None)
        if self._pdf_service is not None:
            self._pdf_service.clear_active_template(doc_type)

    def create_template(
        self,
        name: str,
        description: Optional[str],
        doc_type: DocumentTypeEnum,
        design: TemplateDesign,
    ) -> DocumentTemplate:
        """New templates start inactive; activate them with set_active_template."""
        now = datetime.now()
        template = DocumentTemplate(
            id=self._next_id(),
            name=name,
            description=description,
            type=doc_type,
            is_active=False,
            is_default=False,
            design=design,
            created_at=now,
            updated_at=now,
        )
        self.register_template(template)
        logger.info(f"Created {doc_type.value} template '{name}' ({template.id})")
        return template

    def update_template(self, template_id: str, updates: Union[DocumentTemplateUpdate, Mapping[str, Any]]) -> bool:
        if isinstance(updates, DocumentTemplateUpdate):
            changes = updates.model_dump(exclude_unset=True)
        else:
            changes = {key: value for key, value in updates.items() if key in UPDATABLE_FIELDS}
        # name and design can't be cleared, only replaced
        for required in ("name", "design"):
            if changes.get(required, "") is None:
                del changes[required]

        with self._lock:
            template = self._templates.get(template_id)
            if template is None:
                return False

            if "design" in changes and not isinstance(changes["design"], TemplateDesign):
                changes["design"] = TemplateDesign.model_validate(changes["design"])
            changes["updated_at"] = datetime.now()

            updated = template.model_copy(update=changes)
            self._templates[template_id] = updated
            self._forward(updated)
            return True

    def duplicate_template(self, template_id: str, new_name: Optional[str] = None) -> Optional[DocumentTemplate]:
        with self._lock:
            original = self._templates.get(template_id)
            if original is None:
                return None

            now = datetime.now()
            duplicate = original.model_copy(
                update={
                    "id": self._next_id(),
                    "name": new_name or f"{original.name} (Copy)",
                    "is_active": False,
                    "is_default": False,
                    "created_at": now,
                    "updated_at": now,
                },
                deep=True,
            )
            self.register_template(duplicate)
            return duplicate

    # --- Internals ---
    def _forward(self, template: DocumentTemplate) -> None:
        if self._pdf_service is not None:
            self._pdf_service.register_template(template)

    def _next_id(self) -> str:
        """Millisecond timestamp, bumped when two templates are made in the same millisecond."""
        with self._lock:
            candidate = int(time.time() * 1000)
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            self._last_id = candidate
            return str(candidate)
