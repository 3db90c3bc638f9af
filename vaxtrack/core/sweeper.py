# core/sweeper.py
"""
Daily job that marks overdue appointments as missed.

Runs inside the API process as an asyncio task started from the app lifespan. A failed
run is logged and left for the next day; the sweep only touches `scheduled` rows dated
before now, so running it again is harmless.
"""

import asyncio
from datetime import datetime, timedelta

from pymongo.errors import PyMongoError

from vaxtrack.core.workflow import ScheduleWorkflow
from vaxtrack.utils.logger import logger


def seconds_until_next_run(now: datetime, hour: int) -> float:
	"""Seconds from `now` until the next `hour`:00, tomorrow if that time has passed today."""
	target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
	if target <= now:
		target += timedelta(days=1)
	return (target - now).total_seconds()

class MissedScheduleSweeper:

	def __init__(self, workflow: ScheduleWorkflow, hour: int = 1):
		if not 0 <= hour <= 23:
			raise ValueError(f"Sweep hour must be between 0 and 23, got {hour}")
		self.workflow = workflow
		self.hour = hour
		self._task: asyncio.Task | None = None

	def run_once(self) -> int | None:
		"""Runs one sweep. Returns the number of schedules marked missed, None if it failed."""
		try:
			return self.workflow.sweep_missed()
		except PyMongoError as e:
			logger(tag="sweep").error(f"Error updating missed vaccination statuses: {e}")
			return None

	async def _loop(self):
		while True:
			delay = seconds_until_next_run(self.workflow.clock.now(), self.hour)
			logger(tag="sweep").info(f"Next missed-vaccination sweep in {delay / 3600:.1f}h")
			await asyncio.sleep(delay)
			try:
				await asyncio.to_thread(self.run_once)
			except Exception as e:
				# Keep the task alive, tomorrow's run tries again
				logger(tag="sweep").exception(f"Missed-vaccination sweep crashed: {e}")

	def start(self) -> None:
		if self._task is None or self._task.done():
			self._task = asyncio.get_running_loop().create_task(self._loop())

	async def stop(self) -> None:
		if self._task is None:
			return
		self._task.cancel()
		try:
			await self._task
		except asyncio.CancelledError:
			pass
		self._task = None
