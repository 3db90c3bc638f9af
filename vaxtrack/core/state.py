# core/state.py

from vaxtrack.config.settings import settings
from vaxtrack.core.sweeper import MissedScheduleSweeper
from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.utils.clock import Clock


class AppState:
	"""Holds the process-wide services using a Singleton pattern."""
	_instance = None

	def __new__(cls):
		if cls._instance is None:
			cls._instance = super(AppState, cls).__new__(cls)
			cls._instance._initialized = False
		return cls._instance

	def __init__(self):
		if self._initialized:
			return
		self.clock: Clock
		self.workflow: ScheduleWorkflow
		self.sweeper: MissedScheduleSweeper
		self.initialize()
		self._initialized = True

	def initialize(self, clock: Clock | None = None):
		"""(Re)builds the services around `clock`. Tests pass a `FixedClock`."""
		self.clock = clock or Clock()
		self.workflow = ScheduleWorkflow(self.clock)
		self.sweeper = MissedScheduleSweeper(self.workflow, hour=settings.SWEEP_HOUR)

def get_state() -> AppState:
	"""Provides access to the application state, for use as a dependency."""
	return AppState()

def get_workflow() -> ScheduleWorkflow:
	return get_state().workflow

def get_clock() -> Clock:
	return get_state().clock
