import logging
import logging.config

def setup_logger(config):
    """Настройка логирования по конфигурации (консоль и, при LOG_TO_FILE, ротация файлов)"""
    if config.log_to_file:
        config.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())
    return logging.getLogger()
