"""
Tests for locating elements and for the built-in browser/element commands.
"""

import pytest

from browser_dispatch import BrowserConfig, NoSuchElementError, remote


class TestLocate:
	async def test_locate_wires_element_to_browser(self, browser, transport):
		elem = await browser.locate('#foo')

		assert elem.selector == '#foo'
		assert elem.index is None
		assert elem.parent is None
		assert elem.browser is browser
		assert elem.element_id is not None
		assert transport.queries == [('#foo', None)]

	async def test_locate_all_indexes_in_order(self, browser):
		elems = await browser.locate_all('.someRandomElement')

		assert len(elems) == 3
		assert [e.index for e in elems] == [0, 1, 2]
		assert len({e.element_id for e in elems}) == 3
		assert all(e.browser is browser for e in elems)

	async def test_sub_queries_are_scoped_to_parent_node(self, browser, transport):
		elem = await browser.locate('#foo')
		sub_elems = await elem.locate_all('.item')
		leaf = await sub_elems[1].locate('.leaf')

		assert transport.queries[1] == ('.item', elem.element_id)
		assert transport.queries[2] == ('.leaf', sub_elems[1].element_id)
		assert leaf.parent is sub_elems[1]
		assert sub_elems[1].parent is elem
		assert leaf.browser is browser

	async def test_missing_element(self, browser, transport):
		transport.missing_selectors.add('#missing')
		elem = await browser.locate('#missing')

		assert elem.element_id is None
		assert await elem.is_existing() is False
		with pytest.raises(NoSuchElementError, match='#missing'):
			await elem.click()
		with pytest.raises(NoSuchElementError):
			await elem.locate('.child')

	async def test_missing_collection_is_empty(self, browser, transport):
		transport.missing_selectors.add('.none')

		assert await browser.locate_all('.none') == []


class TestBuiltins:
	async def test_browser_builtins(self, browser, transport):
		assert await browser.execute('return 1;') == 1
		assert await browser.get_title() == 'Fake Page'
		assert await browser.get_url() == 'http://foobar.com/'

		await browser.navigate('http://foobar.com/next')
		assert transport.navigations == ['http://foobar.com/next']

	async def test_execute_forwards_arguments(self, browser, transport):
		transport.script_results['return arguments[0] + arguments[1];'] = lambda a, b: a + b

		assert await browser.execute('return arguments[0] + arguments[1];', 2, 3) == 5
		assert transport.executed[-1] == ('return arguments[0] + arguments[1];', (2, 3), None)

	async def test_element_builtins_target_the_node(self, browser, transport):
		transport.script_results['return this.innerText;'] = 'hello'
		transport.script_results['return this.getAttribute(arguments[0]);'] = lambda name: f'attr:{name}'
		elem = await browser.locate('#foo')

		assert await elem.get_text() == 'hello'
		assert await elem.get_attribute('href') == 'attr:href'
		await elem.click()

		assert transport.executed[0] == ('return this.innerText;', (), elem.element_id)
		assert transport.executed[-1] == ('this.click();', (), elem.element_id)

	async def test_element_execute_runs_in_page_scope(self, browser, transport):
		elem = await browser.locate('#foo')

		assert await elem.execute('return 1;') == 1
		assert transport.executed[-1] == ('return 1;', (), None)

	async def test_unknown_command(self, browser):
		elem = await browser.locate('#foo')

		assert getattr(browser, 'does_not_exist', None) is None
		assert getattr(elem, 'does_not_exist', None) is None
		with pytest.raises(AttributeError, match='does_not_exist'):
			await elem.invoke('does_not_exist')


class TestRemote:
	async def test_remote_accepts_dict_config(self, fake_transport_class):
		browser = await remote({'cdp_url': 'http://localhost:9333', 'capabilities': {'browserName': 'chrome'}}, transport=fake_transport_class())

		assert isinstance(browser.config, BrowserConfig)
		assert browser.config.cdp_url == 'http://localhost:9333'
		assert browser.config.capabilities == {'browserName': 'chrome'}
		assert browser.is_multiremote is False

	async def test_remote_rejects_unknown_config_keys(self, fake_transport_class):
		with pytest.raises(ValueError):
			await remote({'baseUrl': 'http://foobar.com'}, transport=fake_transport_class())

	async def test_sessions_have_unique_ids(self, fake_transport_class):
		first = await remote(transport=fake_transport_class())
		second = await remote(transport=fake_transport_class())

		assert first.id != second.id
		assert str(first).startswith('Browser')

	async def test_close_closes_transport(self, fake_transport_class):
		transport = fake_transport_class()
		browser = await remote(transport=transport)

		await browser.close()
		assert transport.closed
