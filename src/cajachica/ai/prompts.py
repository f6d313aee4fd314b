"""Prompt templates for the Gemini provider."""

from datetime import date
from typing import Optional, Sequence

from cajachica.domain.entities import LedgerCandidate

CODE_STRUCTURE_RULES = """
Los códigos de cuenta siguen la estructura jerárquica X-XX-XXX-XXXX:
- X: clase (1 Activo, 2 Pasivo, 3 Patrimonio Neto, 4 Ingresos, 5 Egresos)
- XX: cuenta mayor (01, 02, ...)
- XXX: subcuenta (001, 002, ...)
- XXXX: cuenta auxiliar (0001, 0002, ...)

Formato obligatorio:
1. Separar cada nivel con guion (-).
2. Completar con ceros a la izquierda hasta la longitud de cada nivel.
3. Ejemplos: ingresos "4-01-001-0001", egresos "5-01-002-0005".
"""


def chart_prompt(activity_label: str) -> str:
    return f"""
Sos un contador profesional en Argentina. Generá un plan de cuentas (asientos
contables) completo para alguien cuya actividad es: "{activity_label}".

{CODE_STRUCTURE_RULES}

Requisitos:
1. Entre 20 y 30 cuentas esenciales para la actividad.
2. Incluí cuentas generales (Caja, Bancos, Ventas, Gastos Varios) y otras
   propias de "{activity_label}".
3. Respondé únicamente con un array JSON, sin texto adicional:
   [{{"codigo": "1-01-001-0001", "nombre": "Caja Central", "descripcion": "Dinero en efectivo"}}]
"""


def new_account_prompt(purpose: str, entity_name: str, activity: str, existing_codes: Sequence[str]) -> str:
    codes = ", ".join(existing_codes) if existing_codes else "Ninguno"
    return f"""
Sos un contador profesional en Argentina. Sugerí el código y el nombre de una
nueva cuenta contable para el siguiente propósito.

Propósito: "{purpose}"
Entidad / negocio: "{entity_name}"
Actividad general: "{activity}"

{CODE_STRUCTURE_RULES}

Códigos existentes (no los repitas): {codes}

El código sugerido debe ser el siguiente correlativo libre dentro de la clase
y la cuenta mayor que correspondan. Si existe "4-01-001-0002" para algo
similar, sugerí "4-01-001-0003".

Respondé únicamente con un objeto JSON:
{{"codigo": "X-XX-XXX-XXXX", "nombre": "Nombre sugerido", "descripcion": "Breve descripción contable"}}
"""


def match_prompt(
    description: str,
    transaction_type: Optional[str],
    activity: str,
    candidates: Sequence[LedgerCandidate],
    entity_name: Optional[str] = None,
) -> str:
    lines = "\n".join(f"{c.id}|{c.code}|{c.name}" for c in candidates)
    entity_line = f'Entidad relacionada: "{entity_name}"\n' if entity_name else ""
    type_line = f'Tipo: "{transaction_type}"\n' if transaction_type else ""
    return f"""
Como contador profesional, elegí de la lista el asiento contable más adecuado
para esta transacción.

Transacción: "{description}"
{type_line}{entity_line}Actividad del usuario: "{activity}"

{CODE_STRUCTURE_RULES}

Cuentas disponibles (ID|Codigo|Nombre):
{lines}

Respondé únicamente con el ID del asiento elegido.
"""


def interpret_prompt(
    text: str,
    entities: Sequence[str],
    accounts: Sequence[str],
    ledger_accounts: Sequence[str],
    today: date,
) -> str:
    return f"""
Sos un asistente financiero argentino. Convertí la transcripción en un objeto JSON.

Si el usuario los menciona, usá exactamente estos nombres:
- ENTIDADES: {", ".join(entities)}
- CUENTAS BANCARIAS: {", ".join(accounts)}
- ASIENTOS CONTABLES: {", ".join(ledger_accounts)}

Campos:
1. "description": el detalle restante, sin monto, moneda, banco ni entidad.
2. "entityKeyword": nombre exacto de ENTIDADES si coincide.
3. "bankKeyword": nombre exacto de CUENTAS BANCARIAS si coincide.
4. "categoryKeyword": nombre exacto de ASIENTOS CONTABLES si coincide.
5. "amount" (número), "currency" (ARS o USD), "type" (INGRESO o EGRESO) y
   "date" (AAAA-MM-DD; hoy es {today.isoformat()}).

Ejemplo: "500 verdes de Orange al Nación por marketing" ->
{{"amount": 500, "currency": "USD", "entityKeyword": "Orange", "bankKeyword": "Banco Nación", "description": "Servicios de marketing", "type": "INGRESO"}}

Respondé únicamente con JSON.

Texto: "{text}"
"""
