# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend de HelldiversBoost.

Permite que los módulos internos se importen como 'app.*' cuando la
carpeta 'backend' está en PYTHONPATH.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

# Fin del archivo backend/app/__init__.py
