import os
from datetime import datetime
from werkzeug.utils import secure_filename
from bakusam.models.order import Order
from bakusam.models.order_photo import OrderPhoto
import logging

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "heic"}

class PhotoService:
    """Stores delivery evidence photos uploaded by drivers."""

    def __init__(self, session_factory, upload_dir: str):
        self.session_factory = session_factory
        self.upload_dir = upload_dir

    @staticmethod
    def is_allowed(filename: str) -> bool:
        return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS

    async def save_photos(self, order_id: int, photos: list) -> dict:
        """``photos`` is a list of (filename, bytes) pairs."""
        if not photos:
            return {"error": "No photos uploaded", "status": 400}
        rejected = [name for name, _ in photos if not self.is_allowed(name or "")]
        if rejected:
            logger.warning(f"Rejected photo upload for order {order_id}: {rejected}")
            return {"error": f"Unsupported file type: {', '.join(rejected)}", "status": 400}

        async with self.session_factory() as session:
            written = []
            try:
                order = await session.get(Order, order_id)
                if not order:
                    logger.warning(f"Photo upload for non-existent order: {order_id}")
                    return {"error": "Order not found", "status": 404}

                os.makedirs(self.upload_dir, exist_ok=True)
                stamp = datetime.utcnow()
                for index, (filename, content) in enumerate(photos):
                    stored_name = f"{order_id}_{stamp:%Y%m%d%H%M%S}_{index}_{secure_filename(filename)}"
                    path = os.path.join(self.upload_dir, stored_name)
                    with open(path, "wb") as handle:
                        handle.write(content)
                    written.append(path)
                    session.add(OrderPhoto(order_id=order_id, file_name=stored_name, uploaded_at=stamp))
                await session.commit()
                logger.info(f"Stored {len(written)} photo(s) for order {order_id}")
                return {
                    "success": True,
                    "uploadedPhotos": len(written),
                    "orderId": order_id,
                    "timestamp": stamp.isoformat(),
                    "message": "Photos uploaded successfully",
                    "status": 200
                }
            except Exception as e:
                await session.rollback()
                for path in written:
                    if os.path.exists(path):
                        os.remove(path)
                logger.error(f"Photo upload failed for order {order_id}: {str(e)}", exc_info=True)
                return {"error": "Failed to upload photos", "status": 500}
