"""
Portfolio — HTML Templates
Inline Jinja sources rendered with render_template_string.
"""

BASE_CSS = """
:root{--bg:#0d0d10;--sf:#17171c;--sf2:#212129;--bd:#2e2e38;--tx:#ececf1;--tx2:#9a9aa8;
--ac:#e0b45b;--gn:#34d399;--rd:#f87171;--r:10px}
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:'DM Sans',sans-serif;background:var(--bg);color:var(--tx);min-height:100vh;line-height:1.55}
a{color:var(--ac);text-decoration:none}
.ctr{max-width:980px;margin:0 auto;padding:24px 28px}
.card{background:var(--sf);border:1px solid var(--bd);border-radius:var(--r);padding:20px;margin-bottom:16px}
.card-t{font-size:12px;font-weight:600;color:var(--tx2);text-transform:uppercase;letter-spacing:1px;margin-bottom:14px}
.btn{padding:7px 14px;border-radius:6px;border:1px solid var(--bd);background:var(--sf2);color:var(--tx);cursor:pointer;font-size:13px}
.btn:hover{border-color:var(--ac)}
.btn-p{background:var(--ac);color:#111;border-color:var(--ac)}
.btn-d{border-color:var(--rd);color:var(--rd)}
input,textarea,select{width:100%;background:var(--sf2);border:1px solid var(--bd);color:var(--tx);border-radius:6px;padding:8px 10px;font:inherit}
textarea{min-height:120px}
label{display:block;font-size:12px;color:var(--tx2);margin:10px 0 4px}
.alert{padding:10px 14px;border-radius:8px;margin-bottom:14px;font-size:14px}
.al-s{background:rgba(52,211,153,.1);border:1px solid var(--gn)}
.al-e{background:rgba(248,113,113,.1);border:1px solid var(--rd)}
.row{display:flex;gap:8px;align-items:center}
.track{display:grid;grid-template-columns:1fr auto;gap:10px;align-items:center;padding:10px 0;border-bottom:1px solid var(--bd)}
.mono{font-family:'JetBrains Mono',monospace;font-size:12px;color:var(--tx2)}
"""

PAGE_INDEX = """<!DOCTYPE html>
<html lang="{{ lang }}"><head><meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{{ t('meta.title') }}</title>
<meta name="description" content="{{ t('meta.description') }}">
<style>""" + BASE_CSS + """</style></head><body>
<div class="ctr">
 <header class="row" style="justify-content:space-between">
  <h1>{{ t('hero.name') }}</h1>
  <select class="language-selector" style="width:auto" aria-label="{{ t('nav.language') }}">
   {% for code in languages %}<option value="{{ code }}" {{ 'selected' if code == lang }}>{{ code|upper }}</option>{% endfor %}
  </select>
 </header>
 <p class="mono">{{ t('hero.tagline') }}</p>

 <section id="about" class="card">
  <div class="card-t">{{ t('about.title') }}</div>
  <img src="/images/profile.webp" alt="{{ t('about.photoAlt') }}" style="max-width:180px;border-radius:50%;float:right;margin-left:16px">
  <p style="white-space:pre-line">{{ bio }}</p>
 </section>

 <section id="work" class="card">
  <div class="card-t">{{ t('work.title') }}</div>
  {% for track in tracks %}
  <div class="track" data-url="{{ track.url }}">
   <div>{{ track.title }}</div>
   <audio controls preload="none" src="{{ track.url }}"></audio>
  </div>
  {% else %}
  <p class="mono">{{ t('work.empty') }}</p>
  {% endfor %}
 </section>

 <section id="contact" class="card">
  <div class="card-t">{{ t('contact.title') }}</div>
  <form id="contact-form">
   <label>{{ t('contact.email') }}</label><input type="email" name="email" required maxlength="254">
   <label>{{ t('contact.bandName') }}</label><input name="bandName" maxlength="200">
   <label>{{ t('contact.numberOfSongs') }}</label><input name="numberOfSongs" maxlength="20">
   <label>{{ t('contact.links') }}</label><input name="links" maxlength="2000">
   <label>{{ t('contact.services') }}</label>
   <div class="row">
   {% for s in services %}<label class="row" style="width:auto"><input type="checkbox" name="services" value="{{ s }}" style="width:auto"> {{ t('services.' ~ s) }}</label>{% endfor %}
   </div>
   <label>{{ t('contact.message') }}</label><textarea name="message" required maxlength="5000"></textarea>
   <p style="margin-top:12px"><button class="btn btn-p" type="submit">{{ t('contact.send') }}</button></p>
   <div id="contact-status" class="mono" style="margin-top:10px"></div>
  </form>
 </section>
</div>
<script>
document.querySelectorAll('.language-selector').forEach(function(sel){
 sel.addEventListener('change',function(e){window.location.href='/'+e.target.value;});
});
document.getElementById('contact-form').addEventListener('submit',function(e){
 e.preventDefault();
 var f=e.target, status=document.getElementById('contact-status');
 var body={email:f.email.value,bandName:f.bandName.value,numberOfSongs:f.numberOfSongs.value,
  links:f.links.value,message:f.message.value,
  services:Array.from(f.querySelectorAll('input[name=services]:checked')).map(function(c){return c.value;})};
 fetch('/api/contact',{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify(body)})
  .then(function(r){return r.json();})
  .then(function(d){status.textContent=d.success?d.message:d.error;if(d.success)f.reset();})
  .catch(function(){status.textContent={{ t('contact.error')|tojson }};});
});
</script>
</body></html>"""

ADMIN_HEAD = """<!DOCTYPE html><html><head><meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>Admin</title><style>""" + BASE_CSS + """</style></head><body>
<div class="ctr">
<nav class="row" style="margin-bottom:18px">
 <a class="btn {{ 'btn-p' if page == 'about' }}" href="/admin/about">About</a>
 <a class="btn {{ 'btn-p' if page == 'work' }}" href="/admin/work">Work</a>
 <a class="btn {{ 'btn-p' if page == 'translations' }}" href="/admin/translations">Translations</a>
 <a class="btn" href="/" style="margin-left:auto">View site</a>
</nav>
{% if message %}<div class="alert al-s">{{ message }}</div>{% endif %}
{% if error %}<div class="alert al-e">{{ error }}</div>{% endif %}
"""

ADMIN_FOOT = """
</div></body></html>"""

PAGE_ADMIN_ABOUT = """
<div class="card">
 <div class="card-t">Bio</div>
 <form method="post" action="/admin/about/bio">
  <label>English</label><textarea name="bioEn">{{ bio.en }}</textarea>
  <label>Français</label><textarea name="bioFr">{{ bio.fr }}</textarea>
  <p style="margin-top:12px"><button class="btn btn-p" type="submit">Save bio</button></p>
 </form>
</div>
<div class="card">
 <div class="card-t">Profile photo</div>
 {% if has_photo %}<img src="/images/profile.webp" alt="" style="max-width:160px;border-radius:8px;margin-bottom:10px">{% endif %}
 <form method="post" action="/admin/about/photo" enctype="multipart/form-data">
  <input type="file" name="photo" accept="image/webp,image/jpeg,image/png,image/gif">
  <p class="mono">webp, jpeg, png or gif, 5 MB max</p>
  <p style="margin-top:12px"><button class="btn btn-p" type="submit">Upload photo</button></p>
 </form>
</div>
"""

PAGE_ADMIN_WORK = """
<div class="card">
 <div class="card-t">Upload track</div>
 <form method="post" action="/admin/work/upload" enctype="multipart/form-data">
  <input type="file" name="audio" accept="audio/*">
  <p class="mono">mp3, wav, ogg, m4a or flac, 50 MB max</p>
  <p style="margin-top:12px"><button class="btn btn-p" type="submit">Upload</button></p>
 </form>
</div>
<div class="card">
 <div class="card-t">Tracks ({{ tracks|length }})</div>
 {% for track in tracks %}
 <div class="track">
  <form method="post" action="/admin/work/update" class="row">
   <input type="hidden" name="filename" value="{{ track.filename }}">
   <input name="title" value="{{ track.title }}" maxlength="200">
   <button class="btn" type="submit">Rename</button>
   <span class="mono">{{ track.filename }}</span>
  </form>
  <div class="row">
   <form method="post" action="/admin/work/reorder">
    <input type="hidden" name="filename" value="{{ track.filename }}">
    <button class="btn" name="direction" value="up" type="submit" {{ 'disabled' if loop.first }}>&uarr;</button>
    <button class="btn" name="direction" value="down" type="submit" {{ 'disabled' if loop.last }}>&darr;</button>
   </form>
   <form method="post" action="/admin/work/delete" onsubmit="return confirm({{ ('Delete ' ~ track.filename ~ '?')|tojson|forceescape }})">
    <input type="hidden" name="filename" value="{{ track.filename }}">
    <button class="btn btn-d" type="submit">Delete</button>
   </form>
  </div>
 </div>
 {% else %}
 <p class="mono">No tracks yet.</p>
 {% endfor %}
</div>
"""

PAGE_ADMIN_TRANSLATIONS = """
<form method="post" action="/admin/translations">
 <div class="card">
  <div class="card-t">English (en.json)</div>
  <textarea name="en" spellcheck="false" style="min-height:360px" class="mono">{{ en_json }}</textarea>
 </div>
 <div class="card">
  <div class="card-t">Français (fr.json)</div>
  <textarea name="fr" spellcheck="false" style="min-height:360px" class="mono">{{ fr_json }}</textarea>
 </div>
 <button class="btn btn-p" type="submit">Save translations</button>
</form>
"""
