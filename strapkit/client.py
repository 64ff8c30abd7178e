# strapkit/client.py
"""
The page runtime every rendered form includes.

It records client-side property changes, collects input values, fires
events back to the server through a pluggable transport, and provides the
small jQuery plugin the modal commands call.
"""

CLIENT_SCRIPT = r"""
var strapkit = (function ($) {
    var pending = {};
    var sk = {
        formId: null,
        ajaxUrl: null,
        recordControlModification: function (controlId, property, value) {
            (pending[controlId] = pending[controlId] || {})[property] = value;
        },
        collectValues: function () {
            var values = {};
            $('#' + sk.formId).find('input, select, textarea').each(function () {
                var el = $(this), name = el.attr('name');
                if (!name) { return; }
                if (el.is(':checkbox')) {
                    values[name] = el.is(':checked');
                } else if (el.is(':radio')) {
                    if (el.is(':checked')) { values[name] = el.val(); }
                } else {
                    values[name] = el.val();
                }
            });
            return values;
        },
        fire: function (controlId, eventName, param, data, mode) {
            var event = {
                control_id: controlId,
                event: eventName,
                param: param === undefined ? null : param,
                event_data: data === undefined ? null : data,
                values: sk.collectValues(),
                modifications: pending
            };
            pending = {};
            if (mode === 'server') {
                sk.submit(event);
                return;
            }
            sk.transport(event);
        },
        submit: function (event) {
            var form = $('#' + sk.formId);
            $('<input type="hidden" name="strapkit_event">').val(JSON.stringify(event)).appendTo(form);
            form.submit();
        },
        transport: function (event) {
            $.ajax({url: sk.ajaxUrl || window.location.href, type: 'POST', dataType: 'script',
                    contentType: 'application/json', data: JSON.stringify(event)});
        }
    };

    $.fn.bsModal = function (options, a, b) {
        if (options === 'open') { return this.modal('show'); }
        if (options === 'close') { return this.modal('hide'); }
        if (options === 'showButton') { this.find('[data-btnid="' + a + '"]').toggle(b); return this; }
        if (options === 'setButtonCss') { this.find('[data-btnid="' + a + '"]').css(b); return this; }
        return this.modal({show: !!options.show, keyboard: options.keyboard, backdrop: options.backdrop});
    };

    function controlOf(modal) {
        return modal.id.replace(/_ctl$/, '');
    }

    $(document)
        .on('shown.bs.modal', '.modal', function () {
            sk.recordControlModification(controlOf(this), '_IsOpen', true);
        })
        .on('hidden.bs.modal', '.modal', function () {
            sk.recordControlModification(controlOf(this), '_IsOpen', false);
        })
        .on('click', '.modal [data-btnid]', function () {
            var button = $(this), modal = button.closest('.modal');
            if (button.data('confirm') && !window.confirm(button.data('confirm'))) { return; }
            sk.recordControlModification(controlOf(modal[0]), '_ClickedButton', button.data('btnid'));
            modal.trigger('bsdialogbutton', button.data('btnid'));
        });

    return sk;
})(jQuery);
"""
