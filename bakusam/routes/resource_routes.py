from quart import Blueprint, request, jsonify
from bakusam.routes.auth import require_auth
from bakusam.services.auth import AuthService
from bakusam.services.resource_service import ResourceService
import logging

logger = logging.getLogger(__name__)

def _error_response(result: dict):
    body = {"error": result["error"]}
    if "fields" in result:
        body["fields"] = result["fields"]
    return jsonify(body), result.get("status", 500)

def init_resource_routes(path: str, service: ResourceService, auth_service: AuthService):
    """Build the GET/POST/PATCH/PUT/DELETE endpoints for ``/api/<path>``."""
    resource_bp = Blueprint(path.replace('-', '_'), __name__, url_prefix=f'/api/{path}')

    @resource_bp.before_request
    async def authorize():
        return await require_auth(auth_service)

    @resource_bp.route('', methods=['GET'])
    async def list_items():
        try:
            result = await service.list_items()
            if "error" in result:
                return _error_response(result)
            return jsonify(result["items"]), 200
        except Exception as e:
            logger.error(f"List {path} endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @resource_bp.route('/<int:item_id>', methods=['GET'])
    async def get_item(item_id):
        try:
            result = await service.get_item(item_id)
            if "error" in result:
                return _error_response(result)
            return jsonify(result["item"]), 200
        except Exception as e:
            logger.error(f"Get {path} endpoint error for {item_id}: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @resource_bp.route('', methods=['POST'])
    async def create_item():
        try:
            data = await request.get_json(silent=True)
            if data is None:
                logger.warning(f"Invalid create {path} request: body is not JSON")
                return jsonify({"error": "Invalid JSON format"}), 400
            result = await service.create_item(data)
            if "error" in result:
                return _error_response(result)
            return jsonify(result["item"]), 201
        except Exception as e:
            logger.error(f"Create {path} endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @resource_bp.route('/<int:item_id>', methods=['PATCH', 'PUT'])
    async def update_item(item_id):
        try:
            data = await request.get_json(silent=True)
            if data is None:
                logger.warning(f"Invalid update {path} request: body is not JSON")
                return jsonify({"error": "Invalid JSON format"}), 400
            result = await service.update_item(item_id, data, partial=request.method == 'PATCH')
            if "error" in result:
                return _error_response(result)
            return jsonify(result["item"]), 200
        except Exception as e:
            logger.error(f"Update {path} endpoint error for {item_id}: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @resource_bp.route('/<int:item_id>', methods=['DELETE'])
    async def delete_item(item_id):
        try:
            result = await service.delete_item(item_id)
            if "error" in result:
                return _error_response(result)
            return jsonify({"message": result["message"]}), 200
        except Exception as e:
            logger.error(f"Delete {path} endpoint error for {item_id}: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    return resource_bp
