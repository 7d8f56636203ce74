"""
Сервер записей дневника настроения
"""
