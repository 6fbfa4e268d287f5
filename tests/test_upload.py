"""
Tests de la carga de documentos PDF.
"""

from pathlib import Path

from cooperacion.config import get_settings
from cooperacion.services.file_storage import path_from_url

_PDF = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def _archivo(nombre="acta firmada.pdf", contenido=_PDF, tipo="application/pdf"):
    return {"file": (nombre, contenido, tipo)}


class TestUpload:
    def test_sube_pdf_y_retorna_url(self, client, editor_headers):
        r = client.post("/api/upload/", files=_archivo(), headers=editor_headers)
        assert r.status_code == 200
        url = r.json()["url"]
        assert url.startswith("/files/")
        assert url.endswith("_acta_firmada.pdf")
        assert "/editor/" in url

        settings = get_settings()
        ruta = path_from_url(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
        assert ruta is not None and ruta.read_bytes() == _PDF

    def test_archivo_servido_en_files(self, client, editor_headers):
        url = client.post("/api/upload/", files=_archivo(), headers=editor_headers).json()["url"]
        r = client.get(url)
        assert r.status_code == 200
        assert r.content == _PDF

    def test_vincula_proyecto(self, client, editor_headers, crear_proyecto):
        proyecto = crear_proyecto()
        r = client.post(
            "/api/upload/",
            files=_archivo(),
            data={"entidad": "proyecto", "id": str(proyecto.num_proyecto)},
            headers=editor_headers,
        )
        assert r.status_code == 200
        url = r.json()["url"]

        detalle = client.get(f"/api/proyectos/{proyecto.num_proyecto}", headers=editor_headers)
        assert detalle.json()["documentos"] == url

        # eliminar el documento borra el archivo almacenado
        settings = get_settings()
        ruta = path_from_url(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
        client.delete(f"/api/proyectos/{proyecto.num_proyecto}/documento", headers=editor_headers)
        assert not Path(ruta).exists()

    def test_vincula_viaje(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje()
        r = client.post(
            "/api/upload/",
            files=_archivo(),
            data={"entidad": "viaje", "id": str(viaje.id)},
            headers=editor_headers,
        )
        detalle = client.get(f"/api/viajes_al_exterior/{viaje.id}", headers=editor_headers)
        assert detalle.json()["documento"] == r.json()["url"]

    def test_reemplazo_borra_documento_anterior_de_proyecto(self, client, editor_headers, crear_proyecto):
        proyecto = crear_proyecto()
        datos = {"entidad": "proyecto", "id": str(proyecto.num_proyecto)}
        primero = client.post(
            "/api/upload/", files=_archivo("a.pdf"), data=datos, headers=editor_headers
        ).json()["url"]
        segundo = client.post(
            "/api/upload/", files=_archivo("b.pdf"), data=datos, headers=editor_headers
        ).json()["url"]

        settings = get_settings()
        assert not path_from_url(primero, settings.UPLOADS_DIR, settings.FILES_BASE_URL).exists()
        assert path_from_url(segundo, settings.UPLOADS_DIR, settings.FILES_BASE_URL).exists()
        detalle = client.get(f"/api/proyectos/{proyecto.num_proyecto}", headers=editor_headers)
        assert detalle.json()["documentos"] == segundo

    def test_reemplazo_borra_documento_anterior_de_viaje(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje()
        datos = {"entidad": "viaje", "id": str(viaje.id)}
        primero = client.post(
            "/api/upload/", files=_archivo("a.pdf"), data=datos, headers=editor_headers
        ).json()["url"]
        segundo = client.post(
            "/api/upload/", files=_archivo("b.pdf"), data=datos, headers=editor_headers
        ).json()["url"]

        settings = get_settings()
        assert not path_from_url(primero, settings.UPLOADS_DIR, settings.FILES_BASE_URL).exists()
        assert path_from_url(segundo, settings.UPLOADS_DIR, settings.FILES_BASE_URL).exists()
        detalle = client.get(f"/api/viajes_al_exterior/{viaje.id}", headers=editor_headers)
        assert detalle.json()["documento"] == segundo

    def test_registro_inexistente(self, client, editor_headers):
        r = client.post(
            "/api/upload/", files=_archivo(), data={"entidad": "viaje", "id": "99"}, headers=editor_headers
        )
        assert r.status_code == 404

    def test_entidad_invalida(self, client, editor_headers):
        r = client.post(
            "/api/upload/", files=_archivo(), data={"entidad": "usuario", "id": "1"}, headers=editor_headers
        )
        assert r.status_code == 400

    def test_rechaza_no_pdf(self, client, editor_headers):
        r = client.post(
            "/api/upload/", files=_archivo("foto.png", b"\x89PNG\r\n", "image/png"), headers=editor_headers
        )
        assert r.status_code == 400

    def test_rechaza_extension_pdf_falsa(self, client, editor_headers):
        r = client.post(
            "/api/upload/", files=_archivo("falso.pdf", b"hola", "application/pdf"), headers=editor_headers
        )
        assert r.status_code == 400

    def test_rechaza_vacio(self, client, editor_headers):
        r = client.post("/api/upload/", files=_archivo(contenido=b""), headers=editor_headers)
        assert r.status_code == 400

    def test_rechaza_archivo_grande(self, client, editor_headers, monkeypatch):
        monkeypatch.setattr(get_settings(), "MAX_UPLOAD_MB", 0)
        r = client.post("/api/upload/", files=_archivo(), headers=editor_headers)
        assert r.status_code == 400

    def test_consulta_no_sube(self, client, consulta_headers):
        r = client.post("/api/upload/", files=_archivo(), headers=consulta_headers)
        assert r.status_code == 403
