"""
Базовый класс коллектора FDB.

Определяет общий интерфейс для всех коллекторов.
Все коллекторы должны наследоваться от BaseCollector.

Ошибка одного устройства не прерывает сбор: она попадает
в CollectionResult.errors и выводится как предупреждение.

Пример создания кастомного коллектора:
    class StaticCollector(BaseCollector):
        def _collect_from_device(self, host):
            return [ForwardingRecord.from_raw(host, "1", "aabbccddeeff", "10")]
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Sequence

from ..core.exceptions import CollectorError
from ..core.models import ForwardingRecord

logger = logging.getLogger(__name__)


@dataclass
class CollectionResult:
    """
    Результат сбора со списка устройств.

    Attributes:
        records: Записи FDB со всех успешно опрошенных устройств
        errors: Ошибки по устройствам
    """
    records: List[ForwardingRecord] = field(default_factory=list)
    errors: List[CollectorError] = field(default_factory=list)

    @property
    def failed_hosts(self) -> List[str]:
        return [error.device for error in self.errors if error.device]

    def warnings(self) -> List[str]:
        """Однострочные сообщения об ошибках для вывода пользователю."""
        return [f"{error.device}: {error.message}" for error in self.errors]


class BaseCollector(ABC):
    """
    Абстрактный базовый класс для коллекторов FDB.

    Attributes:
        max_workers: Максимум параллельных опросов
    """

    def __init__(self, max_workers: int = 10):
        self.max_workers = max_workers

    def collect(self, hosts: Sequence[str], parallel: bool = True) -> CollectionResult:
        """
        Собирает FDB со списка устройств.

        Args:
            hosts: Hostname или IP устройств
            parallel: Параллельный сбор

        Returns:
            CollectionResult: Записи и ошибки по устройствам
        """
        result = CollectionResult()

        if parallel and len(hosts) > 1:
            self._collect_parallel(hosts, result)
        else:
            for host in hosts:
                self._collect_one(host, result)

        logger.info(
            f"Собрано записей: {len(result.records)} с {len(hosts)} устройств, "
            f"ошибок: {len(result.errors)}"
        )
        return result

    def _collect_parallel(self, hosts: Sequence[str], result: CollectionResult) -> None:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._safe_collect, host): host
                for host in hosts
            }

            for future in as_completed(futures):
                records, error = future.result()
                result.records.extend(records)
                if error:
                    result.errors.append(error)

    def _collect_one(self, host: str, result: CollectionResult) -> None:
        records, error = self._safe_collect(host)
        result.records.extend(records)
        if error:
            result.errors.append(error)

    def _safe_collect(self, host: str):
        """Опрашивает устройство; любая ошибка превращается в CollectorError."""
        try:
            records = self._collect_from_device(host)
        except CollectorError as e:
            logger.debug(f"Ошибка сбора с {host}: {e.message}", extra={"device": host})
            return [], e
        except Exception as e:
            logger.debug(f"Ошибка сбора с {host}: {e}", extra={"device": host})
            return [], CollectorError(f"{e.__class__.__name__}: {e}", device=host)

        logger.info(f"{host}: собрано {len(records)} записей")
        return records, None

    @abstractmethod
    def _collect_from_device(self, host: str) -> List[ForwardingRecord]:
        """
        Собирает FDB с одного устройства.

        Абстрактный метод — должен быть реализован в наследниках.

        Args:
            host: Hostname или IP устройства

        Returns:
            List[ForwardingRecord]: Записи FDB

        Raises:
            CollectorError: Устройство недоступно или ответ некорректен
        """
