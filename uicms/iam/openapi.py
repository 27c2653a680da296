from drf_spectacular.extensions import OpenApiAuthenticationExtension


class StaffJWTAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = "uicms.iam.auth.StaffJWTAuthentication"
    name = "StaffBearerJWT"

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Send the access token from /auth/login/ as `Authorization: Bearer <token>`.",
        }
