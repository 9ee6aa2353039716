import platform
import logging
logger = logging.getLogger('hellofixture')


def have_journal():
    return 'Linux' == platform.system()


def log_handler():
    if not have_journal():
        logger.warning("No journald on %s; logging to stderr", platform.system())
        return logging.StreamHandler()

    import systemd.journal
    if hasattr(systemd.journal, 'JournalHandler'):       # official bindings
        return systemd.journal.JournalHandler(SYSLOG_IDENTIFIER='hellofixture')
    elif hasattr(systemd.journal, 'JournaldLogHandler'):  # mosquito bindings
        return systemd.journal.JournaldLogHandler()
    raise AssertionError("Something is wrong with the systemd module we imported")


def notify_ready():
    if not have_journal():
        return

    import systemd.daemon
    if hasattr(systemd.daemon, 'Notification'):          # mosquito bindings
        systemd.daemon.notify(systemd.daemon.Notification.READY)
    else:
        systemd.daemon.notify("READY=1")
