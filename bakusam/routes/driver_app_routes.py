from quart import Blueprint, request, jsonify
from bakusam.routes.auth import require_auth
from bakusam.services.auth import AuthService
from bakusam.services.order_service import OrderService
from bakusam.services.photo_service import PhotoService
import logging

logger = logging.getLogger(__name__)

def init_driver_app_routes(order_service: OrderService, photo_service: PhotoService, auth_service: AuthService):
    driver_app_bp = Blueprint('driver_app', __name__, url_prefix='/api/driver')

    @driver_app_bp.before_request
    async def authorize():
        return await require_auth(auth_service)

    @driver_app_bp.route('/current-order', methods=['GET'])
    async def current_order():
        try:
            driver_id = request.args.get('driverId', type=int)
            if driver_id is None:
                logger.warning("Current order request without driverId")
                return jsonify({"error": "driverId query parameter is required"}), 400

            result = await order_service.get_current_order_for_driver(driver_id)
            if "error" in result:
                return jsonify({"error": result["error"]}), result.get("status", 500)
            return jsonify(result["item"]), 200
        except Exception as e:
            logger.error(f"Current order endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @driver_app_bp.route('/upload-photos', methods=['POST'])
    async def upload_photos():
        try:
            form = await request.form
            files = await request.files
            try:
                order_id = int(form.get('orderId', ''))
            except ValueError:
                logger.warning("Photo upload without a valid orderId")
                return jsonify({"error": "orderId is required"}), 400

            photos = [(photo.filename, photo.read()) for photo in files.getlist('photos')]
            result = await photo_service.save_photos(order_id, photos)
            if "error" in result:
                return jsonify({"error": result["error"]}), result.get("status", 500)
            result.pop("status", None)
            return jsonify(result), 200
        except Exception as e:
            logger.error(f"Upload photos endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    return driver_app_bp
