"""
=========================
Log
=========================

Last update: October 2026

Log class. One named logger per subsystem, all of them mirrored into an in-memory
stream so that a run can be dumped to a text file afterwards.
"""
import logging
import sys
from io import StringIO

class Log:

    def __init__(self):

        self.verbosityDict = {0: False,
                              1: logging.CRITICAL,
                              2: logging.ERROR,
                              3: logging.WARNING,
                              4: logging.INFO,
                              5: logging.DEBUG}

        self.log_stream = StringIO()  # Memory stream for logs

        self.simulator = logging.getLogger('SIMULATOR')
        self.node = logging.getLogger('NODE')
        self.network = logging.getLogger('NETWORK')
        self.topology = logging.getLogger('TOPOLOGY')
        self.graph = logging.getLogger('GRAPH')
        self.protocol = logging.getLogger('PROTOCOL')
        self.config = logging.getLogger('CONFIG')
        self.test = logging.getLogger('TEST')

        self.log_format = '%(msecs).2f - %(name)s - %(levelname)s - %(message)s'

        # Stream handler for console output
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(self.log_format))
        logging.basicConfig(handlers=[console_handler], format=self.log_format)

        # Memory handler to store logs in memory
        memory_handler = logging.StreamHandler(self.log_stream)
        memory_handler.setFormatter(logging.Formatter(self.log_format))

        for logger in self.loggers:
            logger.addHandler(memory_handler)

    @property
    def loggers(self):
        return [self.simulator, self.node, self.network, self.topology,
                self.graph, self.protocol, self.config, self.test]

    def set_level(self, level):
        for logger in self.loggers:
            logger.setLevel(level)
        return

    def set_verbosity(self, verbosity):
        # Verbosity 0 silences everything, including warnings
        level = self.verbosityDict[verbosity]
        if level:
            self.set_level(level)
        else:
            self.set_level(logging.CRITICAL + 1)

    def export_logs_to_txt(self, file_path):
        with open(file_path, 'w') as log_file:
            log_file.write(self.log_stream.getvalue())
        print(f"Logs exported to {file_path}")

log = Log()
