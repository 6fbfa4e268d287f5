"""
Tests de proyectos de cooperación, sus estadísticas y el catálogo de áreas.
"""

from types import SimpleNamespace

import pytest

from cooperacion.services.proyecto_service import agrupar_proyectos, normalizar_sector


# =============================================================================
# CRUD
# =============================================================================


class TestProyectosCrud:
    def test_crear_con_fecha_dd_mm_yyyy(self, client, editor_headers, crear_area):
        area = crear_area()
        r = client.post(
            "/api/proyectos/",
            json={
                "nombre_proyecto": "Educación técnica dual",
                "fecha_aprobacion": "20/05/2024",
                "ano": 2024,
                "costo_total": "$1,500,000",
                "area_id": area.id,
                "sector": "",
            },
            headers=editor_headers,
        )
        assert r.status_code == 201
        body = r.json()
        assert body["fecha_aprobacion"] == "2024-05-20"
        assert body["ano"] == "2024"
        assert body["costo_total"] == "$1,500,000"
        assert body["sector"] is None
        assert body["nombre_area"] == area.nombre_area

    @pytest.mark.parametrize(
        "payload",
        [
            {"nombre_proyecto": "  ", "fecha_aprobacion": "2024-05-20"},
            {"nombre_proyecto": "Sin fecha"},
            {"nombre_proyecto": "Fecha vacía", "fecha_aprobacion": ""},
            {"nombre_proyecto": "Fecha mala", "fecha_aprobacion": "31/02/2024"},
            {"nombre_proyecto": "Sector largo", "fecha_aprobacion": "2024-05-20", "sector": "S" * 101},
            {"nombre_proyecto": "Costo largo", "fecha_aprobacion": "2024-05-20", "costo_total": "$" + "9" * 50},
        ],
    )
    def test_validaciones(self, client, editor_headers, payload):
        assert client.post("/api/proyectos/", json=payload, headers=editor_headers).status_code == 422

    def test_area_inexistente(self, client, editor_headers):
        r = client.post(
            "/api/proyectos/",
            json={"nombre_proyecto": "P", "fecha_aprobacion": "2024-05-20", "area_id": 42},
            headers=editor_headers,
        )
        assert r.status_code == 422

    def test_listar_con_filtros(self, client, admin_headers, crear_proyecto):
        crear_proyecto("Becas Japón", ano="2024", nombre_actor="JICA")
        corea = crear_proyecto("Laboratorios", ano="2025", nombre_actor="KOICA")
        crear_proyecto("Formación docente", ano="2025", nombre_actor="UNESCO")

        r = client.get("/api/proyectos/", params={"ano": "2025", "q": "koica"}, headers=admin_headers)
        assert [p["num_proyecto"] for p in r.json()] == [corea.num_proyecto]

    def test_filtrar_por_area(self, client, admin_headers, crear_area, crear_proyecto):
        area = crear_area()
        con_area = crear_proyecto("Con área", area_id=area.id)
        crear_proyecto("Sin área")
        r = client.get("/api/proyectos/", params={"area_id": area.id}, headers=admin_headers)
        assert [p["num_proyecto"] for p in r.json()] == [con_area.num_proyecto]

    def test_actualizar_conserva_documento(self, client, editor_headers, crear_proyecto):
        proyecto = crear_proyecto(documentos="/files/2025/01/admin/x_acta.pdf", region="Asia")
        r = client.put(
            f"/api/proyectos/{proyecto.num_proyecto}",
            json={"nombre_proyecto": "Renombrado", "fecha_aprobacion": "2025-01-15"},
            headers=editor_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["nombre_proyecto"] == "Renombrado"
        assert body["documentos"] == "/files/2025/01/admin/x_acta.pdf"
        assert body["region"] is None

    def test_obtener_y_eliminar(self, client, editor_headers, crear_proyecto):
        proyecto = crear_proyecto()
        url = f"/api/proyectos/{proyecto.num_proyecto}"
        assert client.get(url, headers=editor_headers).status_code == 200
        assert client.delete(url, headers=editor_headers).status_code == 204
        assert client.get(url, headers=editor_headers).status_code == 404

    def test_eliminar_documento(self, client, editor_headers, crear_proyecto):
        proyecto = crear_proyecto(documentos="https://example.org/acta.pdf")
        r = client.delete(
            f"/api/proyectos/{proyecto.num_proyecto}/documento", headers=editor_headers
        )
        assert r.status_code == 200
        assert r.json()["documentos"] is None

    def test_anios(self, client, admin_headers, crear_proyecto):
        crear_proyecto(ano="2025")
        crear_proyecto(ano="2023")
        crear_proyecto(ano="2025")
        crear_proyecto(ano=None)
        r = client.get("/api/proyectos/anios", headers=admin_headers)
        assert r.json() == ["2023", "2025"]


# =============================================================================
# Estadísticas
# =============================================================================


class TestEstadisticas:
    def test_agrupar_con_sin_datos(self, client, admin_headers, crear_proyecto):
        crear_proyecto("A", etapa_proyecto="Ejecución")
        crear_proyecto("B", etapa_proyecto="  ")
        crear_proyecto("C", etapa_proyecto="Ejecución")
        crear_proyecto("D")

        r = client.get(
            "/api/proyectos/estadisticas", params={"campo": "etapa_proyecto"}, headers=admin_headers
        )
        assert r.status_code == 200
        body = r.json()
        assert body["total"] == 4
        grupos = {g["etiqueta"]: g for g in body["grupos"]}
        assert grupos["Ejecución"]["cantidad"] == 2
        assert grupos["Ejecución"]["porcentaje"] == 50.0
        assert grupos["Ejecución"]["proyectos"] == ["A", "C"]
        assert grupos["Sin datos"]["cantidad"] == 2

    def test_dependencias_separadas_por_coma(self, client, admin_headers, crear_proyecto):
        crear_proyecto("A", dependencias_solicitantes="DRI, Despacho")
        crear_proyecto("B", dependencias_solicitantes="DRI")
        crear_proyecto("C", dependencias_solicitantes="")

        r = client.get(
            "/api/proyectos/estadisticas",
            params={"campo": "dependencias_solicitantes"},
            headers=admin_headers,
        )
        grupos = {g["etiqueta"]: g["cantidad"] for g in r.json()["grupos"]}
        assert grupos == {"DRI": 2, "Despacho": 1}

    def test_agrupar_por_area(self, client, admin_headers, crear_area, crear_proyecto):
        area = crear_area("Multilateral")
        crear_proyecto("A", area_id=area.id)
        crear_proyecto("B")
        r = client.get("/api/proyectos/estadisticas", params={"campo": "area"}, headers=admin_headers)
        etiquetas = [g["etiqueta"] for g in r.json()["grupos"]]
        assert etiquetas == ["Multilateral", "Sin área"]

    def test_filtro_por_ano(self, client, admin_headers, crear_proyecto):
        crear_proyecto("A", ano="2024", modalidad="Donación")
        crear_proyecto("B", ano="2025", modalidad="Préstamo")
        r = client.get(
            "/api/proyectos/estadisticas",
            params={"campo": "modalidad", "ano": "2025"},
            headers=admin_headers,
        )
        assert [g["etiqueta"] for g in r.json()["grupos"]] == ["Préstamo"]

    def test_campo_invalido(self, client, admin_headers):
        r = client.get(
            "/api/proyectos/estadisticas", params={"campo": "objetivos"}, headers=admin_headers
        )
        assert r.status_code == 400

    def test_montos_por_anio(self, client, admin_headers, crear_proyecto):
        crear_proyecto(ano="2025", costo_total="$1,000,000", contrapartida_cooperante="800000")
        crear_proyecto(ano="2025", costo_total="500000 aprox", contrapartida_institucion="n/d")
        crear_proyecto(ano="2024", costo_total="250,000")

        r = client.get("/api/proyectos/estadisticas/montos", headers=admin_headers)
        assert r.json() == [
            {
                "ano": "2024",
                "contrapartida_institucion": 0.0,
                "contrapartida_cooperante": 0.0,
                "costo_total": 250000.0,
            },
            {
                "ano": "2025",
                "contrapartida_institucion": 0.0,
                "contrapartida_cooperante": 800000.0,
                "costo_total": 1500000.0,
            },
        ]

    def test_sectores(self, client, admin_headers, crear_proyecto):
        crear_proyecto(sector=" bilateral ", nombre_actor="KOICA")
        crear_proyecto(sector="ONG", nombre_actor="Plan")
        crear_proyecto(sector="Bilateral")

        r = client.get("/api/proyectos/estadisticas/sectores", headers=admin_headers)
        sectores = {s["sector"]: s for s in r.json()}
        assert len(sectores) == 8
        assert sectores["Bilateral"]["actores"] == ["KOICA", "Sin datos"]
        assert sectores["Otro"]["actores"] == ["Plan"]
        assert sectores["Academia"]["cantidad"] == 0


class TestAgrupacion:
    """Reglas de agrupación sin base de datos."""

    def test_porcentajes_sobre_suma_de_grupos(self):
        proyectos = [
            SimpleNamespace(nombre_proyecto="A", dependencias_solicitantes="X, Y"),
            SimpleNamespace(nombre_proyecto="B", dependencias_solicitantes="X"),
        ]
        grupos = agrupar_proyectos(proyectos, "dependencias_solicitantes")
        assert [(g.etiqueta, g.porcentaje) for g in grupos] == [("X", 66.7), ("Y", 33.3)]

    @pytest.mark.parametrize(
        "valor, esperado",
        [("PÚBLICO", "Público"), ("ONG", "Otro"), (None, "Otro"), (" Academia ", "Academia")],
    )
    def test_normalizar_sector(self, valor, esperado):
        assert normalizar_sector(valor) == esperado


# =============================================================================
# Áreas
# =============================================================================


class TestAreas:
    def test_crear_y_listar_ordenado(self, client, editor_headers):
        for nombre in ("Multilateral", "Bilateral"):
            assert client.post(
                "/api/areas/", json={"nombre_area": nombre}, headers=editor_headers
            ).status_code == 201
        r = client.get("/api/areas/", headers=editor_headers)
        assert [a["nombre_area"] for a in r.json()] == ["Bilateral", "Multilateral"]

    def test_nombre_duplicado(self, client, editor_headers, crear_area):
        crear_area("Bilateral")
        r = client.post("/api/areas/", json={"nombre_area": "bilateral"}, headers=editor_headers)
        assert r.status_code == 409

    def test_nombre_vacio(self, client, editor_headers):
        r = client.post("/api/areas/", json={"nombre_area": " "}, headers=editor_headers)
        assert r.status_code == 422
