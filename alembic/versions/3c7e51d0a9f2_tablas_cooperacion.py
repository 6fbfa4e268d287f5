"""tablas_cooperacion

Crea las tablas del sistema de cooperación internacional: líneas
presupuestarias y sus solicitudes, áreas y proyectos, viajes al exterior
con su registro de seguimiento, y usuarios.

Revision ID: 3c7e51d0a9f2
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c7e51d0a9f2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Paso 1: presupuesto
    op.create_table(
        'subpartida_contratacion',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('subpartida', sa.String(length=20), nullable=False),
        sa.Column('ano_contrato', sa.String(length=4), nullable=False),
        sa.Column('nombre_subpartida', sa.String(length=300), nullable=False),
        sa.Column('descripcion_contratacion', sa.String(length=1000), nullable=True),
        sa.Column('numero_contratacion', sa.String(length=100), nullable=False),
        sa.Column('numero_contrato', sa.String(length=100), nullable=True),
        sa.Column('numero_orden_compra', sa.String(length=100), nullable=True),
        sa.Column('orden_pedido_sicop', sa.String(length=100), nullable=True),
        sa.Column('presupuesto_asignado', sa.Numeric(precision=18, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_subpartida_contratacion_subpartida', 'subpartida_contratacion', ['subpartida']
    )

    op.create_table(
        'solicitud_presupuesto',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('subpartida_contratacion_id', sa.Integer(), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=False),
        sa.Column('fecha_solicitud_boleto', sa.Date(), nullable=True),
        sa.Column('hora_solicitud_boleto', sa.String(length=10), nullable=True),
        sa.Column('oficio_solicitud', sa.String(length=100), nullable=True),
        sa.Column('fecha_respuesta_solicitud', sa.Date(), nullable=True),
        sa.Column('hora_respuesta_solicitud', sa.String(length=10), nullable=True),
        sa.Column('cumple_solicitud', sa.String(length=10), nullable=False),
        sa.Column('fecha_solicitud_emision', sa.Date(), nullable=True),
        sa.Column('hora_solicitud_emision', sa.String(length=10), nullable=True),
        sa.Column('oficio_emision', sa.String(length=100), nullable=True),
        sa.Column('fecha_respuesta_emision', sa.Date(), nullable=True),
        sa.Column('hora_respuesta_emision', sa.String(length=10), nullable=True),
        sa.Column('cumple_emision', sa.String(length=10), nullable=False),
        sa.Column('fecha_recibido_conforme', sa.Date(), nullable=True),
        sa.Column('hora_recibido_conforme', sa.String(length=10), nullable=True),
        sa.Column('oficio_recepcion', sa.String(length=100), nullable=True),
        sa.Column('numero_factura', sa.String(length=100), nullable=True),
        sa.Column('total_factura', sa.String(length=50), nullable=True),
        sa.Column('fecha_entrega_direccion', sa.Date(), nullable=True),
        sa.Column('estado', sa.String(length=100), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['subpartida_contratacion_id'], ['subpartida_contratacion.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_solicitud_presupuesto_subpartida_contratacion_id',
        'solicitud_presupuesto',
        ['subpartida_contratacion_id'],
    )

    # Paso 2: proyectos
    op.create_table(
        'area',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nombre_area', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('nombre_area'),
    )

    op.create_table(
        'proyecto',
        sa.Column('num_proyecto', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('nombre_proyecto', sa.String(length=500), nullable=False),
        sa.Column('fecha_aprobacion', sa.Date(), nullable=False),
        sa.Column('actor_cooperacion', sa.String(length=200), nullable=True),
        sa.Column('nombre_actor', sa.String(length=300), nullable=True),
        sa.Column('etapa_proyecto', sa.String(length=100), nullable=True),
        sa.Column('tipo_proyecto', sa.String(length=100), nullable=True),
        sa.Column('tipo_cooperacion', sa.String(length=100), nullable=True),
        sa.Column('modalidad', sa.String(length=100), nullable=True),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=True),
        sa.Column('autoridad_a_cargo', sa.String(length=200), nullable=True),
        sa.Column('ano', sa.String(length=4), nullable=True),
        sa.Column('costo_total', sa.String(length=50), nullable=True),
        sa.Column('contrapartida_institucion', sa.String(length=50), nullable=True),
        sa.Column('contrapartida_cooperante', sa.String(length=50), nullable=True),
        sa.Column('dependencias_solicitantes', sa.String(length=1000), nullable=True),
        sa.Column('institucion_solicitante', sa.String(length=300), nullable=True),
        sa.Column('objetivos', sa.Text(), nullable=True),
        sa.Column('resultados', sa.Text(), nullable=True),
        sa.Column('productos', sa.Text(), nullable=True),
        sa.Column('tematicas', sa.String(length=500), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('documentos', sa.String(length=500), nullable=True),
        sa.Column('area_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['area_id'], ['area.id']),
        sa.PrimaryKeyConstraint('num_proyecto'),
    )
    op.create_index('ix_proyecto_ano', 'proyecto', ['ano'])

    # Paso 3: viajes al exterior
    op.create_table(
        'viaje_exterior',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ano_viaje', sa.String(length=4), nullable=True),
        sa.Column('funcionario_a_cargo', sa.String(length=300), nullable=True),
        sa.Column('nombre_funcionario', sa.String(length=300), nullable=True),
        sa.Column('cargo_funcionario_dependencia', sa.String(length=300), nullable=True),
        sa.Column('nombre_actividad', sa.String(length=500), nullable=False),
        sa.Column('organizador_evento', sa.String(length=300), nullable=True),
        sa.Column('lugar_destino', sa.String(length=200), nullable=True),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('tema', sa.String(length=300), nullable=True),
        sa.Column('numero_acuerdo', sa.String(length=100), nullable=True),
        sa.Column('autoridad_delegado', sa.String(length=50), nullable=True),
        sa.Column('modalidad', sa.String(length=50), nullable=True),
        sa.Column('fuente_financiamiento', sa.String(length=300), nullable=True),
        sa.Column('fecha_actividad_inicio', sa.Date(), nullable=False),
        sa.Column('fecha_actividad_final', sa.Date(), nullable=False),
        sa.Column('fecha_viaje_inicio', sa.Date(), nullable=False),
        sa.Column('fecha_viaje_final', sa.Date(), nullable=False),
        sa.Column('vacaciones', sa.String(length=20), nullable=True),
        sa.Column('detalle_vacaciones', sa.Text(), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('estado', sa.String(length=50), nullable=False),
        sa.Column('documento', sa.String(length=500), nullable=True),
        sa.Column('gaceta_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_viaje_exterior_ano_viaje', 'viaje_exterior', ['ano_viaje'])

    op.create_table(
        'observacion_viaje',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('viaje_id', sa.Integer(), nullable=False),
        sa.Column('observacion', sa.Text(), nullable=False),
        sa.Column('quien_envia', sa.String(length=200), nullable=False),
        sa.Column('quien_recibe', sa.String(length=200), nullable=False),
        sa.Column('fecha', sa.Date(), nullable=False),
        sa.Column('hora', sa.String(length=5), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['viaje_id'], ['viaje_exterior.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_observacion_viaje_viaje_id', 'observacion_viaje', ['viaje_id'])

    # Paso 4: usuarios
    op.create_table(
        'usuario',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=200), nullable=False),
        sa.Column('password_hash', sa.String(length=200), nullable=False),
        sa.Column('nombre_completo', sa.String(length=300), nullable=True),
        sa.Column('rol', sa.String(length=50), nullable=True),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('ultimo_acceso', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )


def downgrade() -> None:
    op.drop_table('usuario')
    op.drop_index('ix_observacion_viaje_viaje_id', table_name='observacion_viaje')
    op.drop_table('observacion_viaje')
    op.drop_index('ix_viaje_exterior_ano_viaje', table_name='viaje_exterior')
    op.drop_table('viaje_exterior')
    op.drop_index('ix_proyecto_ano', table_name='proyecto')
    op.drop_table('proyecto')
    op.drop_table('area')
    op.drop_index(
        'ix_solicitud_presupuesto_subpartida_contratacion_id', table_name='solicitud_presupuesto'
    )
    op.drop_table('solicitud_presupuesto')
    op.drop_index(
        'ix_subpartida_contratacion_subpartida', table_name='subpartida_contratacion'
    )
    op.drop_table('subpartida_contratacion')
