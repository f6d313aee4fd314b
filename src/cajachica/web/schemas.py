"""Request bodies accepted by the HTTP API."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cajachica.domain.errors import ValidationError
from cajachica.utils.date_parser import parse_optional_datetime


def parse_when(value: Optional[str], label: str) -> Optional[datetime]:
    """Parse an optional date/timestamp field, reporting bad input as a ValidationError."""
    try:
        return parse_optional_datetime(value)
    except ValueError:
        raise ValidationError(f"{label} inválida: '{value}'")


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EntityCreate(RequestModel):
    nombre: str
    descripcion: Optional[str] = None
    tipo: str
    activa: bool = True


class EntityUpdate(RequestModel):
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    tipo: Optional[str] = None
    activa: Optional[bool] = None


class BankAccountCreate(RequestModel):
    nombre: str
    banco: str
    numero_cuenta: Optional[str] = Field(default=None, alias="numeroCuenta")
    tipo_cuenta: Optional[str] = Field(default=None, alias="tipoCuenta")
    moneda: str = "ARS"
    activa: bool = True


class BankAccountUpdate(RequestModel):
    nombre: Optional[str] = None
    banco: Optional[str] = None
    numero_cuenta: Optional[str] = Field(default=None, alias="numeroCuenta")
    tipo_cuenta: Optional[str] = Field(default=None, alias="tipoCuenta")
    moneda: Optional[str] = None
    activa: Optional[bool] = None


class LedgerAccountCreate(RequestModel):
    codigo: str
    nombre: str
    descripcion: Optional[str] = None
    activo: bool = True
    entidad_id: Optional[int] = Field(default=None, alias="entidadId")


class LedgerAccountUpdate(RequestModel):
    codigo: Optional[str] = None
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    activo: Optional[bool] = None
    entidad_id: Optional[int] = Field(default=None, alias="entidadId")


class LedgerBulkActive(RequestModel):
    ids: list[int]
    activo: bool


class GenerateChartRequest(RequestModel):
    tipo_actividad: Optional[str] = Field(default=None, alias="tipoActividad")


class TransactionDescriptor(RequestModel):
    descripcion: Optional[str] = None
    tipo: Optional[str] = None


class SuggestRequest(RequestModel):
    """Either a creation request (``isCreation`` + ``proposito``) or a match
    request (``transaccion.descripcion``)."""

    is_creation: bool = Field(default=False, alias="isCreation")
    proposito: Optional[str] = None
    entidad: Optional[str] = None
    actividad: Optional[str] = None
    transaccion: Optional[TransactionDescriptor] = None


class TransactionCreate(RequestModel):
    descripcion: str
    monto: Decimal
    moneda: str = "ARS"
    tipo: str
    estado: str = "REAL"
    fecha: Optional[str] = None
    fecha_planificada: Optional[str] = Field(default=None, alias="fechaPlanificada")
    comentario: Optional[str] = None
    entidad_id: int = Field(alias="entidadId")
    cuenta_bancaria_id: int = Field(alias="cuentaBancariaId")
    asiento_contable_id: int = Field(alias="asientoContableId")


class TransactionBatchCreate(RequestModel):
    transacciones: list[TransactionCreate] = Field(min_length=1)


class TransactionUpdate(RequestModel):
    descripcion: Optional[str] = None
    monto: Optional[Decimal] = None
    moneda: Optional[str] = None
    tipo: Optional[str] = None
    fecha: Optional[str] = None
    fecha_planificada: Optional[str] = Field(default=None, alias="fechaPlanificada")
    comentario: Optional[str] = None
    entidad_id: Optional[int] = Field(default=None, alias="entidadId")
    cuenta_bancaria_id: Optional[int] = Field(default=None, alias="cuentaBancariaId")
    asiento_contable_id: Optional[int] = Field(default=None, alias="asientoContableId")


class MarkRealizedRequest(RequestModel):
    fecha_real: Optional[str] = Field(default=None, alias="fechaReal")


class VoiceRequest(RequestModel):
    text: Optional[str] = None
