from quart import Blueprint, jsonify
from bakusam.routes.auth import require_auth
from bakusam.services.auth import AuthService
from bakusam.services.dashboard_service import DashboardService
import logging

logger = logging.getLogger(__name__)

def init_dashboard_routes(session_factory, auth_service: AuthService):
    dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')
    dashboard_service = DashboardService(session_factory)

    @dashboard_bp.route('/stats', methods=['GET'])
    async def get_stats():
        try:
            auth_error = await require_auth(auth_service)
            if auth_error:
                return auth_error

            result = await dashboard_service.get_stats()
            if "error" in result:
                return jsonify({"error": result["error"]}), result.get("status", 500)
            return jsonify(result["stats"]), 200
        except Exception as e:
            logger.error(f"Dashboard stats endpoint error: {str(e)}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    return dashboard_bp
