"""Pulumi entry point for VM connection resolution."""
import structlog

from vmconn_infra.__main__ import VmConnStack
from vmconn_infra.config import StackConfig

config = StackConfig.load()
structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(config.log_level_number))
VmConnStack(config=config).run()
