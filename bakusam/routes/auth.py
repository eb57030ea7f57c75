from quart import Blueprint, request, jsonify
from bakusam.services.auth import AuthService
import logging

logger = logging.getLogger(__name__)

def get_bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1]

async def require_auth(auth_service: AuthService):
    """Return an error response for a missing or invalid token, None otherwise."""
    if request.method == 'OPTIONS':
        return None
    token = get_bearer_token()
    if not token:
        logger.warning(f"Missing or invalid Authorization header on {request.path}")
        return jsonify({"error": "Missing or invalid Authorization header"}), 401
    result = await auth_service.validate_user_token(token)
    if "error" in result:
        return jsonify({"error": result["error"]}), result.get("status", 401)
    return None

def init_auth_routes(auth_service: AuthService):
    auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

    @auth_bp.route('/login', methods=['POST'])
    async def login():
        try:
            data = await request.get_json(silent=True)
            if not data or not all(data.get(key) for key in ['username', 'password']):
                logger.warning("Invalid login request: missing required fields")
                return jsonify({"error": "Missing required fields"}), 400

            result = await auth_service.login(
                username=data['username'],
                password=data['password']
            )
            if "error" in result:
                return jsonify({"error": result["error"]}), result.get("status", 401)
            return jsonify(result), 200
        except Exception as e:
            logger.error(f"Login endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    @auth_bp.route('/me', methods=['GET'])
    async def me():
        try:
            token = get_bearer_token()
            if not token:
                return jsonify({"error": "Missing or invalid Authorization header"}), 401
            result = await auth_service.validate_user_token(token)
            if "error" in result:
                return jsonify({"error": result["error"]}), result.get("status", 401)
            return jsonify({"userId": result["user_id"], "role": result["role"]}), 200
        except Exception as e:
            logger.error(f"Me endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    return auth_bp
