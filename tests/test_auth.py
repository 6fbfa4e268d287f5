"""
Tests de autenticación y control de acceso por rol.
"""

from cooperacion.models import Usuario
from cooperacion.services.auth_service import ensure_admin_user
from cooperacion.utils.security import create_access_token, verify_password, verify_token


class TestLogin:
    def test_login_exitoso(self, client, admin):
        r = client.post("/api/auth/login", data={"username": "admin", "password": "Secreto123!"})
        assert r.status_code == 200
        body = r.json()
        assert body["token_type"] == "bearer"
        claims = verify_token(body["access_token"])
        assert claims["sub"] == str(admin.id)
        assert claims["rol"] == "ADMIN"

    def test_login_registra_ultimo_acceso(self, client, db, admin):
        client.post("/api/auth/login", data={"username": "admin", "password": "Secreto123!"})
        db.refresh(admin)
        assert admin.ultimo_acceso is not None

    def test_password_incorrecto(self, client, admin):
        r = client.post("/api/auth/login", data={"username": "admin", "password": "otra"})
        assert r.status_code == 401

    def test_usuario_inactivo(self, client, db, admin):
        admin.activo = False
        db.commit()
        r = client.post("/api/auth/login", data={"username": "admin", "password": "Secreto123!"})
        assert r.status_code == 401

    def test_me_y_refresh(self, client, admin_headers):
        r = client.get("/api/auth/me", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["username"] == "admin"

        r = client.post("/api/auth/refresh", headers=admin_headers)
        assert r.status_code == 200
        assert verify_token(r.json()["access_token"])["username"] == "admin"


class TestAcceso:
    def test_sin_token(self, client):
        assert client.get("/api/proyectos/").status_code == 401

    def test_token_invalido(self, client):
        r = client.get("/api/proyectos/", headers={"Authorization": "Bearer no-es-un-jwt"})
        assert r.status_code == 401

    def test_token_de_usuario_inexistente(self, client, db):
        token = create_access_token({"sub": "999", "username": "fantasma", "rol": "ADMIN"})
        r = client.get("/api/proyectos/", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401

    def test_consulta_puede_leer(self, client, consulta_headers):
        assert client.get("/api/areas/", headers=consulta_headers).status_code == 200

    def test_consulta_no_puede_escribir(self, client, consulta_headers, crear_linea, crear_viaje):
        crear_linea()
        viaje = crear_viaje()
        assert client.post(
            "/api/areas/", json={"nombre_area": "Nueva"}, headers=consulta_headers
        ).status_code == 403
        assert client.delete(
            f"/api/viajes_al_exterior/{viaje.id}", headers=consulta_headers
        ).status_code == 403
        assert client.put(
            "/api/subpartida_contratacion/1",
            json={
                "subpartida": "10503",
                "ano_contrato": "2025",
                "nombre_subpartida": "X",
                "numero_contratacion": "X",
                "presupuesto_asignado": 1,
            },
            headers=consulta_headers,
        ).status_code == 403


class TestAdminInicial:
    def test_crea_admin(self, db):
        admin = ensure_admin_user(db, "admin", "Admin123!")
        assert admin.rol == "ADMIN"
        assert verify_password("Admin123!", admin.password_hash)

    def test_no_cambia_password_existente(self, db, admin):
        admin.activo = False
        db.commit()

        ensure_admin_user(db, "admin", "Admin123!")

        usuario = db.query(Usuario).filter(Usuario.username == "admin").one()
        assert usuario.activo is True
        assert verify_password("Secreto123!", usuario.password_hash)
        assert not verify_password("Admin123!", usuario.password_hash)

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "ok"
