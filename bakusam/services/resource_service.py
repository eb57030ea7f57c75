from datetime import datetime, timezone
from enum import Enum as PyEnum
from sqlalchemy import select, Boolean, DateTime, Enum, Float, Integer
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)


def parse_datetime(value):
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    # Timestamps are stored as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class ResourceService:
    """CRUD over one model, speaking the camelCase JSON of the REST API.

    Subclasses set ``model``, ``name`` and ``fields`` (JSON key -> model
    attribute); ``required_fields`` lists the JSON keys a create or a full
    replace must carry. Values are coerced according to the column types.
    Every method returns a dict; failures carry ``error`` and ``status``.
    """

    model = None
    name = "resource"
    fields = {}
    required_fields = []
    read_only_fields = set()

    def __init__(self, session_factory):
        self.session_factory = session_factory

    # -- (de)serialization -------------------------------------------------

    def serialize(self, obj) -> dict:
        data = {"id": obj.id}
        for key, attr in self.fields.items():
            value = getattr(obj, attr)
            if isinstance(value, PyEnum):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[key] = value
        return data

    def _coerce_value(self, key: str, attr: str, value):
        column = self.model.__table__.columns[attr]
        if value is None:
            if not column.nullable:
                raise ValueError(f"{key} cannot be null")
            return None

        column_type = column.type
        try:
            if isinstance(column_type, Enum):
                return column_type.enum_class(value)
            if isinstance(column_type, Boolean):
                if isinstance(value, bool):
                    return value
                if str(value).lower() in ("true", "1"):
                    return True
                if str(value).lower() in ("false", "0"):
                    return False
                raise ValueError(value)
            if isinstance(column_type, DateTime):
                return parse_datetime(value)
            if isinstance(column_type, Float):
                return float(value)
            if isinstance(column_type, Integer):
                if isinstance(value, bool):
                    raise ValueError(value)
                return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {key}: {value!r}")
        return str(value)

    def coerce(self, data: dict, partial: bool = True) -> dict:
        """Translate a JSON payload into model attributes.

        Raises ValueError when a required field is missing (for a full
        payload) or a value cannot be converted. Unknown and read-only keys
        are ignored.
        """
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        if not partial:
            missing = [key for key in self.required_fields if data.get(key) in (None, "")]
            if missing:
                raise MissingFieldsError(missing)

        values = {}
        for key, attr in self.fields.items():
            if key in data and key not in self.read_only_fields:
                values[attr] = self._coerce_value(key, attr, data[key])
        return values

    async def enrich(self, session, items: list) -> list:
        """Hook for attaching related summaries to serialized items."""
        return items

    # -- operations --------------------------------------------------------

    async def list_items(self) -> dict:
        async with self.session_factory() as session:
            try:
                result = await session.execute(
                    select(self.model).order_by(self.model.id.desc())
                )
                objects = result.scalars().all()
                items = await self.enrich(session, [self.serialize(obj) for obj in objects])
                logger.info(f"Retrieved {len(items)} {self.name} record(s)")
                return {"items": items, "status": 200}
            except Exception as e:
                logger.error(f"Failed to retrieve {self.name} list: {str(e)}", exc_info=True)
                return {"error": f"Failed to fetch {self.name} list", "status": 500}

    async def get_item(self, item_id: int) -> dict:
        async with self.session_factory() as session:
            try:
                obj = await session.get(self.model, item_id)
                if not obj:
                    logger.warning(f"{self.name} not found: {item_id}")
                    return {"error": f"{self.name.capitalize()} not found", "status": 404}
                item = (await self.enrich(session, [self.serialize(obj)]))[0]
                return {"item": item, "status": 200}
            except Exception as e:
                logger.error(f"Failed to retrieve {self.name} {item_id}: {str(e)}", exc_info=True)
                return {"error": f"Failed to fetch {self.name}", "status": 500}

    async def create_item(self, data: dict) -> dict:
        try:
            values = self.coerce(data, partial=False)
        except MissingFieldsError as e:
            logger.warning(f"Invalid create {self.name} request: missing {e.fields}")
            return {"error": "Missing required fields", "fields": e.fields, "status": 400}
        except ValueError as e:
            logger.warning(f"Invalid create {self.name} request: {str(e)}")
            return {"error": str(e), "status": 400}

        async with self.session_factory() as session:
            try:
                error = await self.before_create(session, values)
                if error:
                    return error
                obj = self.model(**values)
                session.add(obj)
                await session.commit()
                await session.refresh(obj)
                logger.info(f"{self.name.capitalize()} created successfully: {obj.id}")
                item = (await self.enrich(session, [self.serialize(obj)]))[0]
                return {"item": item, "status": 201}
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.name.capitalize()} creation conflict: {str(e.orig)}")
                return {"error": f"{self.name.capitalize()} conflicts with an existing record", "status": 409}
            except Exception as e:
                await session.rollback()
                logger.error(f"{self.name.capitalize()} creation failed: {str(e)}", exc_info=True)
                return {"error": f"Failed to create {self.name}", "status": 500}

    async def before_create(self, session, values: dict):
        """Hook run inside the create transaction; return an error dict to abort."""
        return None

    async def before_update(self, session, obj, values: dict):
        """Hook run before ``values`` are applied to ``obj``; return an error dict to abort."""
        return None

    async def update_item(self, item_id: int, data: dict, partial: bool = True) -> dict:
        try:
            values = self.coerce(data, partial=partial)
        except MissingFieldsError as e:
            logger.warning(f"Invalid update {self.name} request: missing {e.fields}")
            return {"error": "Missing required fields", "fields": e.fields, "status": 400}
        except ValueError as e:
            logger.warning(f"Invalid update {self.name} request: {str(e)}")
            return {"error": str(e), "status": 400}

        async with self.session_factory() as session:
            try:
                obj = await session.get(self.model, item_id)
                if not obj:
                    logger.warning(f"Update attempt for non-existent {self.name}: {item_id}")
                    return {"error": f"{self.name.capitalize()} not found", "status": 404}
                error = await self.before_update(session, obj, values)
                if error:
                    await session.rollback()
                    return error
                for attr, value in values.items():
                    setattr(obj, attr, value)
                await session.commit()
                await session.refresh(obj)
                logger.info(f"{self.name.capitalize()} {item_id} updated: {sorted(values)}")
                item = (await self.enrich(session, [self.serialize(obj)]))[0]
                return {"item": item, "status": 200}
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.name.capitalize()} update conflict for {item_id}: {str(e.orig)}")
                return {"error": f"{self.name.capitalize()} conflicts with an existing record", "status": 409}
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to update {self.name} {item_id}: {str(e)}", exc_info=True)
                return {"error": f"Failed to update {self.name}", "status": 500}

    async def delete_item(self, item_id: int) -> dict:
        async with self.session_factory() as session:
            try:
                obj = await session.get(self.model, item_id)
                if not obj:
                    logger.warning(f"Delete attempt for non-existent {self.name}: {item_id}")
                    return {"error": f"{self.name.capitalize()} not found", "status": 404}
                await session.delete(obj)
                await session.commit()
                logger.info(f"{self.name.capitalize()} deleted: {item_id}")
                return {"message": f"{self.name.capitalize()} deleted", "status": 200}
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.name.capitalize()} {item_id} is still referenced: {str(e.orig)}")
                return {"error": f"{self.name.capitalize()} is still referenced by other records", "status": 409}
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to delete {self.name} {item_id}: {str(e)}", exc_info=True)
                return {"error": f"Failed to delete {self.name}", "status": 500}


class MissingFieldsError(ValueError):
    def __init__(self, fields):
        super().__init__(f"Missing required fields: {', '.join(fields)}")
        self.fields = fields
