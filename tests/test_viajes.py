"""
Tests de viajes al exterior y su registro de seguimiento.
"""

from datetime import date

import pytest

from cooperacion.models import ObservacionViaje


def _viaje_payload(**extra):
    payload = {
        "ano_viaje": "2025",
        "nombre_actividad": "Reunión de Ministros de Educación OEI",
        "lugar_destino": "Madrid, España",
        "fecha_actividad_inicio": "07/04/2025",
        "fecha_actividad_final": "09/04/2025",
        "fecha_viaje_inicio": "2025-04-05",
        "fecha_viaje_final": "2025-04-11",
    }
    payload.update(extra)
    return payload


# =============================================================================
# Viajes
# =============================================================================


class TestViajes:
    def test_crear_con_estado_inicial(self, client, editor_headers):
        r = client.post("/api/viajes_al_exterior/", json=_viaje_payload(), headers=editor_headers)
        assert r.status_code == 201
        body = r.json()
        assert body["estado"] == "Pendiente"
        assert body["fecha_actividad_inicio"] == "2025-04-07"

    @pytest.mark.parametrize(
        "campo", ["fecha_actividad_inicio", "fecha_actividad_final", "fecha_viaje_inicio", "fecha_viaje_final"]
    )
    def test_fechas_obligatorias(self, client, editor_headers, campo):
        payload = _viaje_payload()
        payload.pop(campo)
        r = client.post("/api/viajes_al_exterior/", json=payload, headers=editor_headers)
        assert r.status_code == 422

    def test_actividad_vacia(self, client, editor_headers):
        r = client.post(
            "/api/viajes_al_exterior/", json=_viaje_payload(nombre_actividad=""), headers=editor_headers
        )
        assert r.status_code == 422

    @pytest.mark.parametrize(
        "campo,valor",
        [("vacaciones", "Sí, del 12 al 14 de abril"), ("modalidad", "P" * 51), ("estado", "E" * 51)],
    )
    def test_texto_mas_largo_que_la_columna(self, client, editor_headers, campo, valor):
        r = client.post(
            "/api/viajes_al_exterior/", json=_viaje_payload(**{campo: valor}), headers=editor_headers
        )
        assert r.status_code == 422

    def test_listar_con_filtros(self, client, admin_headers, crear_viaje):
        crear_viaje("Foro UNESCO", ano_viaje="2024")
        oei = crear_viaje("Congreso OEI", ano_viaje="2025", estado="Aprobado")
        crear_viaje("Cumbre SICA", ano_viaje="2025")

        r = client.get(
            "/api/viajes_al_exterior/",
            params={"ano": "2025", "estado": "Aprobado"},
            headers=admin_headers,
        )
        assert [v["id"] for v in r.json()] == [oei.id]

        r = client.get("/api/viajes_al_exterior/", params={"q": "sica"}, headers=admin_headers)
        assert [v["nombre_actividad"] for v in r.json()] == ["Cumbre SICA"]

    def test_actualizar_conserva_estado(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje(estado="Aprobado", tema="Currículo")
        r = client.put(
            f"/api/viajes_al_exterior/{viaje.id}",
            json=_viaje_payload(lugar_destino="Lisboa"),
            headers=editor_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["estado"] == "Aprobado"
        assert body["lugar_destino"] == "Lisboa"
        assert body["tema"] is None

    def test_gaceta(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje()
        url = f"/api/viajes_al_exterior/{viaje.id}/gaceta"
        r = client.put(url, json={"gaceta_url": "https://www.imprentanacional.go.cr/gaceta/"}, headers=editor_headers)
        assert r.status_code == 200
        assert r.json()["gaceta_url"].startswith("https://")

        assert client.put(url, json={"gaceta_url": "  "}, headers=editor_headers).status_code == 422

    def test_eliminar_documento(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje(documento="https://example.org/acuerdo.pdf")
        r = client.delete(f"/api/viajes_al_exterior/{viaje.id}/documento", headers=editor_headers)
        assert r.status_code == 200
        assert r.json()["documento"] is None

    def test_detalle_con_seguimiento_ordenado(self, client, admin_headers, crear_viaje, crear_observacion):
        viaje = crear_viaje()
        tarde = crear_observacion(viaje, date(2025, 3, 14), "15:00")
        temprano = crear_observacion(viaje, date(2025, 3, 14), "08:30")
        anterior = crear_observacion(viaje, date(2025, 3, 1), "17:00")

        r = client.get(f"/api/viajes_al_exterior/{viaje.id}", headers=admin_headers)
        assert r.status_code == 200
        ids = [o["id"] for o in r.json()["observaciones_seguimiento"]]
        assert ids == [anterior.id, temprano.id, tarde.id]

    def test_eliminar_borra_observaciones(self, client, db, editor_headers, crear_viaje, crear_observacion):
        viaje = crear_viaje()
        crear_observacion(viaje, date(2025, 3, 14), "10:00")

        r = client.delete(f"/api/viajes_al_exterior/{viaje.id}", headers=editor_headers)
        assert r.status_code == 204
        assert db.query(ObservacionViaje).count() == 0
        assert client.get(f"/api/viajes_al_exterior/{viaje.id}", headers=editor_headers).status_code == 404

    def test_reporte_pdf(self, client, admin_headers, crear_viaje, crear_observacion):
        viaje = crear_viaje(vacaciones="Sí", detalle_vacaciones="Del 12 al 15 de abril")
        crear_observacion(viaje, date(2025, 3, 14), "10:00")

        r = client.get(f"/api/viajes_al_exterior/{viaje.id}/reporte.pdf", headers=admin_headers)
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/pdf"
        assert r.content.startswith(b"%PDF")
        assert f"Viaje_{viaje.id:04d}_" in r.headers["content-disposition"]

    def test_reporte_viaje_inexistente(self, client, admin_headers):
        r = client.get("/api/viajes_al_exterior/404/reporte.pdf", headers=admin_headers)
        assert r.status_code == 404


# =============================================================================
# Observaciones
# =============================================================================


class TestObservaciones:
    def _payload(self, viaje_id, **extra):
        payload = {
            "viaje_id": viaje_id,
            "observacion": "Se remite oficio",
            "quien_envia": "DRI",
            "quien_recibe": "Despacho Ministerial",
            "fecha": "14/03/2025",
            "hora": "10:45",
        }
        payload.update(extra)
        return payload

    def test_crear_y_listar(self, client, editor_headers, crear_viaje):
        viaje = crear_viaje()
        r = client.post("/api/observaciones_viajes/", json=self._payload(viaje.id), headers=editor_headers)
        assert r.status_code == 201
        assert r.json()["fecha"] == "2025-03-14"

        r = client.post(
            "/api/observaciones_viajes/",
            json=self._payload(viaje.id, fecha="2025-03-10", hora="09:00"),
            headers=editor_headers,
        )
        assert r.status_code == 201

        r = client.get("/api/observaciones_viajes/", params={"viaje_id": viaje.id}, headers=editor_headers)
        assert [o["fecha"] for o in r.json()] == ["2025-03-10", "2025-03-14"]

    def test_viaje_inexistente(self, client, editor_headers):
        r = client.post("/api/observaciones_viajes/", json=self._payload(99), headers=editor_headers)
        assert r.status_code == 404
        r = client.get("/api/observaciones_viajes/", params={"viaje_id": 99}, headers=editor_headers)
        assert r.status_code == 404

    @pytest.mark.parametrize(
        "extra",
        [{"observacion": " "}, {"quien_envia": ""}, {"quien_recibe": ""}, {"hora": "25:00"}, {"fecha": ""}],
    )
    def test_validaciones(self, client, editor_headers, crear_viaje, extra):
        viaje = crear_viaje()
        r = client.post(
            "/api/observaciones_viajes/", json=self._payload(viaje.id, **extra), headers=editor_headers
        )
        assert r.status_code == 422

    def test_listar_requiere_viaje(self, client, editor_headers):
        assert client.get("/api/observaciones_viajes/", headers=editor_headers).status_code == 422

    def test_eliminar(self, client, editor_headers, crear_viaje, crear_observacion):
        obs = crear_observacion(crear_viaje(), date(2025, 3, 14), "10:00")
        url = f"/api/observaciones_viajes/{obs.id}"
        assert client.delete(url, headers=editor_headers).status_code == 204
        assert client.delete(url, headers=editor_headers).status_code == 404
