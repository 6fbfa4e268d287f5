"""
Tests del libro de presupuesto: líneas (subpartidas), solicitudes y ficha.
"""

import pytest


def _linea_payload(**extra):
    payload = {
        "subpartida": "10503",
        "ano_contrato": "2025",
        "nombre_subpartida": "Transporte en el exterior",
        "numero_contratacion": "2024LD-000012",
        "presupuesto_asignado": 1000000,
    }
    payload.update(extra)
    return payload


# =============================================================================
# Subpartidas
# =============================================================================


class TestSubpartidas:
    def test_crear_y_listar(self, client, editor_headers):
        r = client.post("/api/subpartida_contratacion/", json=_linea_payload(), headers=editor_headers)
        assert r.status_code == 201
        body = r.json()
        assert body["subpartida"] == "10503"
        assert body["presupuesto_asignado"] == 1000000

        r = client.get("/api/subpartida_contratacion/", headers=editor_headers)
        assert [l["id"] for l in r.json()] == [body["id"]]

    def test_ano_numerico_se_acepta(self, client, admin_headers):
        r = client.post(
            "/api/subpartida_contratacion/",
            json=_linea_payload(ano_contrato=2026),
            headers=admin_headers,
        )
        assert r.status_code == 201
        assert r.json()["ano_contrato"] == "2026"

    @pytest.mark.parametrize(
        "campo, valor",
        [
            ("presupuesto_asignado", 0),
            ("presupuesto_asignado", -10),
            ("ano_contrato", "25"),
            ("subpartida", "   "),
            ("numero_contratacion", ""),
        ],
    )
    def test_validaciones(self, client, admin_headers, campo, valor):
        r = client.post(
            "/api/subpartida_contratacion/",
            json=_linea_payload(**{campo: valor}),
            headers=admin_headers,
        )
        assert r.status_code == 422

    def test_filtro_por_ano(self, client, admin_headers, crear_linea):
        crear_linea(ano_contrato="2024")
        nueva = crear_linea(ano_contrato="2025")
        r = client.get(
            "/api/subpartida_contratacion/", params={"ano_contrato": "2025"}, headers=admin_headers
        )
        assert [l["id"] for l in r.json()] == [nueva.id]

    def test_detalle_incluye_saldo(self, client, admin_headers, crear_linea, crear_solicitud):
        linea = crear_linea(presupuesto="500000")
        crear_solicitud(linea, total_factura="700000")

        r = client.get(f"/api/subpartida_contratacion/{linea.id}", headers=admin_headers)
        assert r.status_code == 200
        body = r.json()
        assert body["monto_consumido"] == 700000
        assert body["saldo"] == -200000
        assert body["sobregirado"] is True
        assert body["saldo_formateado"] == "-₡ 200,000.00"

    def test_detalle_inexistente(self, client, admin_headers):
        r = client.get("/api/subpartida_contratacion/999", headers=admin_headers)
        assert r.status_code == 404

    def test_actualizar_reemplaza_campos(self, client, admin_headers, crear_linea):
        linea = crear_linea(numero_contrato="C-1")
        r = client.put(
            f"/api/subpartida_contratacion/{linea.id}",
            json=_linea_payload(presupuesto_asignado=2000000),
            headers=admin_headers,
        )
        assert r.status_code == 200
        assert r.json()["presupuesto_asignado"] == 2000000
        assert r.json()["numero_contrato"] is None

    def test_no_hay_eliminacion(self, client, admin_headers, crear_linea):
        linea = crear_linea()
        r = client.delete(f"/api/subpartida_contratacion/{linea.id}", headers=admin_headers)
        assert r.status_code == 405


# =============================================================================
# Solicitudes
# =============================================================================


class TestSolicitudes:
    def test_crear_solicitud(self, client, editor_headers, crear_linea):
        linea = crear_linea()
        r = client.post(
            "/api/solicitud_presupuesto/",
            json={
                "subpartida_contratacion_id": linea.id,
                "descripcion": "Boleto San José - Madrid",
                "total_factura": 450000,
                "fecha_solicitud_boleto": "03/03/2025",
                "cumple_solicitud": "Sí",
            },
            headers=editor_headers,
        )
        assert r.status_code == 201
        body = r.json()
        assert body["total_factura"] == "450000"
        assert body["fecha_solicitud_boleto"] == "2025-03-03"
        assert body["cumple_emision"] == "Pendiente"

    def test_linea_inexistente_es_422(self, client, editor_headers):
        r = client.post(
            "/api/solicitud_presupuesto/",
            json={"subpartida_contratacion_id": 77, "descripcion": "X", "total_factura": "100"},
            headers=editor_headers,
        )
        assert r.status_code == 422

    @pytest.mark.parametrize("total", ["0", "abc", "-50", None])
    def test_total_no_positivo_es_422(self, client, editor_headers, crear_linea, total):
        linea = crear_linea()
        r = client.post(
            "/api/solicitud_presupuesto/",
            json={"subpartida_contratacion_id": linea.id, "descripcion": "X", "total_factura": total},
            headers=editor_headers,
        )
        assert r.status_code == 422

    @pytest.mark.parametrize(
        "campo,valor",
        [
            ("total_factura", "1" * 51),
            ("hora_solicitud_boleto", "09:30 a. m."),
            ("oficio_emision", "DRI-" + "9" * 97),
        ],
    )
    def test_texto_mas_largo_que_la_columna_es_422(self, client, editor_headers, crear_linea, campo, valor):
        """Un valor que no cabe en la columna se rechaza antes de llegar a la base."""
        linea = crear_linea()
        payload = {"subpartida_contratacion_id": linea.id, "descripcion": "X", "total_factura": "100"}
        payload[campo] = valor
        r = client.post("/api/solicitud_presupuesto/", json=payload, headers=editor_headers)
        assert r.status_code == 422

    def test_put_rechaza_texto_mas_largo_que_la_columna(self, client, editor_headers, crear_linea, crear_solicitud):
        linea = crear_linea()
        solicitud = crear_solicitud(linea)
        r = client.put(
            f"/api/solicitud_presupuesto/{solicitud.id}",
            json={
                "subpartida_contratacion_id": linea.id,
                "descripcion": "X",
                "total_factura": "₡ " + "9" * 60,
            },
            headers=editor_headers,
        )
        assert r.status_code == 422

    def test_cumple_fuera_del_catalogo(self, client, editor_headers, crear_linea):
        linea = crear_linea()
        r = client.post(
            "/api/solicitud_presupuesto/",
            json={
                "subpartida_contratacion_id": linea.id,
                "descripcion": "X",
                "total_factura": "100",
                "cumple_solicitud": "Tal vez",
            },
            headers=editor_headers,
        )
        assert r.status_code == 422

    def test_put_es_reemplazo_completo(self, client, editor_headers, crear_linea, crear_solicitud):
        linea = crear_linea()
        solicitud = crear_solicitud(linea, numero_factura="F-1", oficio_solicitud="DRI-1")

        r = client.put(
            f"/api/solicitud_presupuesto/{solicitud.id}",
            json={"subpartida_contratacion_id": linea.id, "descripcion": "Nueva descripción"},
            headers=editor_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["descripcion"] == "Nueva descripción"
        assert body["numero_factura"] is None
        assert body["oficio_solicitud"] is None
        assert body["total_factura"] is None

    def test_listar_por_linea(self, client, editor_headers, crear_linea, crear_solicitud):
        a, b = crear_linea(), crear_linea(subpartida="10701")
        s1 = crear_solicitud(a)
        crear_solicitud(b)
        r = client.get(
            "/api/solicitud_presupuesto/",
            params={"subpartida_contratacion_id": a.id},
            headers=editor_headers,
        )
        assert [s["id"] for s in r.json()] == [s1.id]

    def test_eliminar(self, client, editor_headers, crear_linea, crear_solicitud):
        solicitud = crear_solicitud(crear_linea())
        r = client.delete(f"/api/solicitud_presupuesto/{solicitud.id}", headers=editor_headers)
        assert r.status_code == 204
        assert client.get(
            f"/api/solicitud_presupuesto/{solicitud.id}", headers=editor_headers
        ).status_code == 404

    def test_eliminar_inexistente(self, client, editor_headers):
        assert client.delete("/api/solicitud_presupuesto/5", headers=editor_headers).status_code == 404


# =============================================================================
# Ficha de presupuesto
# =============================================================================


class TestFicha:
    def test_ficha_calcula_saldo(self, client, admin_headers, crear_linea, crear_solicitud):
        linea = crear_linea()
        crear_solicitud(linea, total_factura="300000")
        crear_solicitud(linea, total_factura="150000")

        r = client.get(
            "/api/presupuesto/ficha",
            params={"subpartida": "10503", "ano": "2025"},
            headers=admin_headers,
        )
        assert r.status_code == 200
        ficha = r.json()["ficha"]
        assert ficha["id"] == linea.id
        assert ficha["monto_consumido"] == 450000
        assert ficha["saldo"] == 550000
        assert ficha["saldo_formateado"] == "₡ 550,000.00"
        assert len(r.json()["solicitudes"]) == 2

    def test_busqueda_no_cambia_el_saldo(self, client, admin_headers, crear_linea, crear_solicitud):
        linea = crear_linea()
        crear_solicitud(linea, total_factura="300000", descripcion="Boleto Madrid")
        crear_solicitud(linea, total_factura="150000", descripcion="Hospedaje Lima")

        r = client.get(
            "/api/presupuesto/ficha",
            params={"subpartida": "10503", "q": "madrid"},
            headers=admin_headers,
        )
        body = r.json()
        assert [s["descripcion"] for s in body["solicitudes"]] == ["Boleto Madrid"]
        assert body["ficha"]["monto_consumido"] == 450000

    def test_ano_sin_linea_usa_la_primera_del_codigo(self, client, admin_headers, crear_linea, crear_solicitud):
        linea = crear_linea(ano_contrato="2024")
        crear_solicitud(linea, total_factura="100000")

        r = client.get(
            "/api/presupuesto/ficha",
            params={"subpartida": "10503", "ano": "2025"},
            headers=admin_headers,
        )
        body = r.json()
        assert body["ficha"]["id"] == linea.id
        assert body["ficha"]["monto_consumido"] == 0
        assert body["solicitudes"] == []

    def test_subpartida_inexistente(self, client, admin_headers):
        r = client.get("/api/presupuesto/ficha", params={"subpartida": "99999"}, headers=admin_headers)
        assert r.status_code == 404

    def test_opciones(self, client, admin_headers, crear_linea):
        crear_linea(subpartida="10503", ano_contrato="2025")
        crear_linea(subpartida="10701", ano_contrato="2024")
        crear_linea(subpartida="10503", ano_contrato="2024")

        r = client.get("/api/presupuesto/opciones", headers=admin_headers)
        assert r.json() == {"subpartidas": ["10503", "10701"], "anos": ["2025", "2024"]}

    def test_requiere_autenticacion(self, client):
        assert client.get("/api/presupuesto/opciones").status_code == 401
