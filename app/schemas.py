"""
Pydantic Schemas for Request/Response Validation

Wire models for the voice ordering API. Field names are snake_case in
Python and camelCase on the wire (e.g., parsed_items <-> "parsedItems"),
matching what the browser client sends and expects.

Author: Khalil Bannouri
Version: 3.0.0
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.services.matching import MatchResult, RecognizedEntity
from app.services.ordering import DraftOrderItem, MenuItem, OrderLine


class WireModel(BaseModel):
    """Base for camelCase wire models that also accept field names."""
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# SHARED SCHEMAS
# =============================================================================

class EntitySpan(WireModel):
    """An entity recognised by the speech-to-text provider."""
    text: str
    type: str
    start_char: int = Field(0, alias="startChar")
    end_char: int = Field(0, alias="endChar")

    @classmethod
    def from_entity(cls, entity: RecognizedEntity) -> "EntitySpan":
        return cls(
            text=entity.text,
            type=entity.type,
            start_char=entity.start_char,
            end_char=entity.end_char,
        )

    def to_entity(self) -> RecognizedEntity:
        return RecognizedEntity(
            text=self.text,
            type=self.type,
            start_char=self.start_char,
            end_char=self.end_char,
        )


class ParsedOrderItem(WireModel):
    """A menu item recognised in a transcript."""
    item_name: str = Field(..., alias="itemName", examples=["Pepperoni Pizza"])
    quantity: int = Field(1, ge=1, examples=[2])
    modifiers: List[str] = Field(default_factory=list, examples=[["no onions"]])
    confidence: float = Field(..., gt=0, le=1, examples=[0.95])

    @classmethod
    def from_match(cls, match: MatchResult) -> "ParsedOrderItem":
        return cls(
            item_name=match.item_name,
            quantity=match.quantity,
            modifiers=list(match.modifiers),
            confidence=match.confidence,
        )

    def to_match(self) -> MatchResult:
        return MatchResult(
            item_name=self.item_name,
            quantity=self.quantity,
            modifiers=tuple(self.modifiers),
            confidence=self.confidence,
        )


class MenuItemSchema(WireModel):
    """A menu item as sent by the client."""
    id: str
    name: str = Field(..., min_length=1, examples=["Garlic Bread"])
    price: float = Field(..., ge=0, examples=[5.99])
    description: str = ""
    image: str = ""
    category: str = ""

    @classmethod
    def from_menu_item(cls, item: MenuItem) -> "MenuItemSchema":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            description=item.description,
            image=item.image,
            category=item.category,
        )

    def to_menu_item(self) -> MenuItem:
        return MenuItem(
            id=self.id,
            name=self.name,
            price=self.price,
            description=self.description,
            image=self.image,
            category=self.category,
        )


# =============================================================================
# TRANSCRIPTION SCHEMAS
# =============================================================================

class TranscriptionRequest(WireModel):
    """Recorded audio plus the menu names to listen for."""
    audio_base64: str = Field("", alias="audioBase64")
    keyterms: List[str] = Field(default_factory=list, examples=[["Pepperoni Pizza", "Coke"]])
    mime_type: str = Field("audio/webm", alias="mimeType")


class TranscriptionResponse(WireModel):
    """Transcript, recognised entities and the items matched in it."""
    success: bool
    transcript: str = ""
    parsed_items: List[ParsedOrderItem] = Field(default_factory=list, alias="parsedItems")
    entities: List[EntitySpan] = Field(default_factory=list)
    error: Optional[str] = None


class StreamConfigRequest(WireModel):
    """Request for realtime transcription connection details."""
    keyterms: List[str] = Field(default_factory=list)


class StreamConfigResponse(WireModel):
    """Connection details for client-side realtime transcription."""
    success: bool
    ws_url: Optional[str] = Field(None, alias="wsUrl")
    api_key: Optional[str] = Field(None, alias="apiKey")
    keyterms: List[str] = Field(default_factory=list)
    error: Optional[str] = None


# =============================================================================
# MATCHING SCHEMAS
# =============================================================================

class MatchRequest(WireModel):
    """Match menu items in an already-transcribed utterance."""
    transcript: str = Field(..., examples=["two pepperoni pizzas, no onions"])
    keyterms: List[str] = Field(default_factory=list)
    entities: List[EntitySpan] = Field(default_factory=list)


class MatchResponse(WireModel):
    parsed_items: List[ParsedOrderItem] = Field(default_factory=list, alias="parsedItems")


# =============================================================================
# DRAFT ORDER SCHEMAS
# =============================================================================

class DraftOrderRequest(WireModel):
    """Matched items to reconcile against the menu."""
    parsed_items: List[ParsedOrderItem] = Field(default_factory=list, alias="parsedItems")
    menu_items: List[MenuItemSchema] = Field(default_factory=list, alias="menuItems")
    auto_confirm_threshold: Optional[float] = Field(
        None, ge=0, le=1, alias="autoConfirmThreshold"
    )


class DraftItemSchema(WireModel):
    menu_item: MenuItemSchema = Field(..., alias="menuItem")
    quantity: int
    modifiers: List[str] = Field(default_factory=list)
    confidence: float
    is_confirmed: bool = Field(..., alias="isConfirmed")
    notes: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: DraftOrderItem) -> "DraftItemSchema":
        return cls(
            menu_item=MenuItemSchema.from_menu_item(draft.menu_item),
            quantity=draft.quantity,
            modifiers=list(draft.modifiers),
            confidence=draft.confidence,
            is_confirmed=draft.is_confirmed,
            notes=draft.notes,
        )


class OrderLineSchema(WireModel):
    menu_item: MenuItemSchema = Field(..., alias="menuItem")
    quantity: int
    notes: Optional[str] = None

    @classmethod
    def from_line(cls, line: OrderLine) -> "OrderLineSchema":
        return cls(
            menu_item=MenuItemSchema.from_menu_item(line.menu_item),
            quantity=line.quantity,
            notes=line.notes,
        )


class DraftOrderResponse(WireModel):
    """Draft items, the lines that would go into the cart, and the subtotal."""
    items: List[DraftItemSchema] = Field(default_factory=list)
    confirmed_lines: List[OrderLineSchema] = Field(default_factory=list, alias="confirmedLines")
    subtotal: float = 0.0


# =============================================================================
# SYSTEM SCHEMAS
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    transcription_service: str
    timestamp: datetime
