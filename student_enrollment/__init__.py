"""
Учебный сервис записи студентов на курсы.

Показывает валидацию на уровне домена:
- Объекты-значения с фабриками, возвращающими Result
- Сущности, собирающие все ошибки полей за один проход
- Агрегат Student с инвариантами записи на курсы
- Прикладной сервис, который переводит DTO в доменные объекты
"""

__version__ = "0.1.0"
