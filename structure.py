"""
pg-backup/
│
├── pg_backup/
│   ├── __init__.py
│   ├── config.py                  # Constantes y valores por defecto
│   ├── exceptions.py              # Errores por fase del ciclo
│   ├── logger.py                  # Servicio de logging
│   ├── models.py                  # Modelos de datos y configuración validada
│   ├── repositories/
│   │   ├── __init__.py
│   │   ├── config_repository.py   # Carga de config.yaml
│   │   └── catalog_repository.py  # Descubrimiento de bases de datos
│   ├── strategies/
│   │   ├── __init__.py
│   │   ├── base_strategy.py       # Estrategia base de dump
│   │   └── postgresql_strategy.py # pg_dump y pg_dumpall
│   ├── storage/
│   │   ├── __init__.py
│   │   ├── base_storage.py        # Interfaz de almacenamiento
│   │   ├── local_storage.py       # Sistema de archivos local
│   │   └── s3_storage.py          # S3 o compatible
│   ├── services/
│   │   ├── __init__.py
│   │   ├── backup_service.py      # Orquestación del ciclo de backup
│   │   ├── compression_service.py # Compresión gzip
│   │   ├── status_service.py      # Estado y disparo manual
│   │   ├── health_server.py       # Servidor HTTP /health /status /trigger
│   │   └── scheduler_service.py   # Programación cron
│   └── factories/
│       ├── __init__.py
│       └── storage_factory.py     # Factory de almacenamiento
│
├── tests/
│
├── main.py                        # Punto de entrada
├── pyproject.toml
├── .env.example
├── config.yaml.example
└── README.md
"""
