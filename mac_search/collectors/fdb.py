"""
Коллектор FDB (таблицы MAC-адресов) по SNMP.

Обходит Q-BRIDGE-MIB:
- dot1qTpFdbPort: индекс fdbId.m1.m2.m3.m4.m5.m6, значение — bridge-порт;
- dot1qVlanFdbId: индекс timeMark.vlanIndex, значение — fdbId.

Второй обход нужен чтобы перевести fdbId в VLAN ID. Если коммутатор
его не публикует, VLAN считается равным fdbId (типично для IVL).

Пример использования:
    collector = FdbCollector(community="public", timeout=2.0)
    result = collector.collect(["sw1", "10.0.0.2"])
    result.records  # [ForwardingRecord(host="sw1", port="24", ...)]
    result.errors   # [SNMPError("No SNMP response ...", device="10.0.0.2")]
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Tuple

from pysnmp.hlapi.v3arch.asyncio import (
    CommunityData,
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    walk_cmd,
)

from .base import BaseCollector
from ..core.exceptions import SNMPError, ValidationError
from ..core.models import ForwardingRecord

logger = logging.getLogger(__name__)

OID_DOT1Q_TP_FDB_PORT = "1.3.6.1.2.1.17.7.1.2.2.1.2"
OID_DOT1Q_VLAN_FDB_ID = "1.3.6.1.2.1.17.7.1.4.2.1.3"

WalkResult = List[Tuple[str, Any]]


def _suffix(oid: str, base: str) -> List[int]:
    """Индекс строки таблицы: компоненты OID после базового."""
    if not oid.startswith(base + "."):
        raise ValueError(f"OID {oid} вне таблицы {base}")
    return [int(part) for part in oid[len(base) + 1:].split(".")]


def parse_vlan_fdb_ids(rows: Iterable[Tuple[str, Any]]) -> Dict[int, int]:
    """
    Разбирает dot1qVlanFdbId в маппинг fdbId → VLAN ID.

    Args:
        rows: (oid, value) из обхода OID_DOT1Q_VLAN_FDB_ID

    Returns:
        Dict[int, int]: {fdb_id: vlan_id}
    """
    mapping: Dict[int, int] = {}
    for oid, value in rows:
        try:
            index = _suffix(str(oid), OID_DOT1Q_VLAN_FDB_ID)
            vlan_id = index[-1]
            mapping.setdefault(int(value), vlan_id)
        except (ValueError, IndexError, TypeError):
            logger.debug(f"Пропущена строка dot1qVlanFdbId: {oid}", extra={"oid": OID_DOT1Q_VLAN_FDB_ID})
    return mapping


def parse_fdb_ports(
    host: str,
    rows: Iterable[Tuple[str, Any]],
    fdb_to_vlan: Dict[int, int],
) -> List[ForwardingRecord]:
    """
    Разбирает dot1qTpFdbPort в записи FDB.

    Записи с портом 0 (MAC самого коммутатора / CPU) пропускаются.

    Args:
        host: Устройство, с которого получены данные
        rows: (oid, value) из обхода OID_DOT1Q_TP_FDB_PORT
        fdb_to_vlan: Маппинг fdbId → VLAN ID

    Returns:
        List[ForwardingRecord]: Записи FDB
    """
    records: List[ForwardingRecord] = []
    for oid, value in rows:
        try:
            index = _suffix(str(oid), OID_DOT1Q_TP_FDB_PORT)
            if len(index) != 7:
                raise ValueError(f"Неожиданная длина индекса: {len(index)}")
            fdb_id, octets = index[0], index[1:]
            port = int(value)
            if port == 0:
                continue
            mac = "".join(f"{octet:02x}" for octet in octets)
            vlan = fdb_to_vlan.get(fdb_id, fdb_id)
            records.append(ForwardingRecord.from_raw(host, port, mac, vlan))
        except (ValueError, TypeError, ValidationError) as e:
            logger.debug(
                f"{host}: пропущена строка dot1qTpFdbPort {oid}: {e}",
                extra={"device": host, "oid": OID_DOT1Q_TP_FDB_PORT},
            )
    return records


class FdbCollector(BaseCollector):
    """
    Коллектор FDB через SNMP v1/v2c.

    Каждое устройство опрашивается в своём потоке со своим event loop.

    Attributes:
        community: SNMP community
        version: Версия SNMP ("1" или "2c")
        port: UDP порт агента
        timeout: Таймаут запроса в секундах
        retries: Количество повторов
    """

    def __init__(
        self,
        community: str = "public",
        version: str = "2c",
        port: int = 161,
        timeout: float = 2.0,
        retries: int = 1,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.community = community
        self.version = version
        self.port = port
        self.timeout = timeout
        self.retries = retries

    def _collect_from_device(self, host: str) -> List[ForwardingRecord]:
        return asyncio.run(self._poll(host))

    async def _poll(self, host: str) -> List[ForwardingRecord]:
        engine = SnmpEngine()
        fdb_rows = await self._walk(engine, host, OID_DOT1Q_TP_FDB_PORT)

        try:
            fdb_to_vlan = parse_vlan_fdb_ids(
                await self._walk(engine, host, OID_DOT1Q_VLAN_FDB_ID)
            )
        except SNMPError as e:
            logger.debug(
                f"{host}: dot1qVlanFdbId недоступен, VLAN = fdbId ({e.message})",
                extra={"device": host, "oid": OID_DOT1Q_VLAN_FDB_ID},
            )
            fdb_to_vlan = {}

        return parse_fdb_ports(host, fdb_rows, fdb_to_vlan)

    async def _walk(self, engine: SnmpEngine, host: str, oid: str) -> WalkResult:
        """
        Обходит таблицу SNMP.

        Raises:
            SNMPError: error_indication или error_status от агента
        """
        # mpModel: 0 = SNMPv1, 1 = SNMPv2c
        auth = CommunityData(self.community, mpModel=0 if self.version == "1" else 1)
        transport = await UdpTransportTarget.create(
            (host, self.port), timeout=self.timeout, retries=self.retries,
        )

        results: WalkResult = []
        async for error_indication, error_status, error_index, var_binds in walk_cmd(
            engine,
            auth,
            transport,
            ContextData(),
            ObjectType(ObjectIdentity(oid)),
            lexicographicMode=False,
        ):
            if error_indication:
                raise SNMPError(str(error_indication), device=host, oid=oid)
            if error_status:
                raise SNMPError(error_status.prettyPrint(), device=host, oid=oid)
            for var_bind in var_binds:
                results.append((str(var_bind[0]), var_bind[1]))

        logger.debug(f"Получено {len(results)} строк", extra={"device": host, "oid": oid})
        return results
